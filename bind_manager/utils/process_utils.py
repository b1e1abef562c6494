"""Process utilities."""
import subprocess
from typing import List, Optional

import psutil

from bind_manager.core.logger import logger


class ProcessUtils:
    """Utility class for process management."""

    @staticmethod
    def is_running(pid: int) -> bool:
        """
        Check if a process is running.

        Args:
            pid: Process ID

        Returns:
            True if running, False otherwise
        """
        return psutil.pid_exists(pid)

    @staticmethod
    def run_command_sync(cmd: List[str], timeout: Optional[float] = None) -> Optional[tuple]:
        """
        Run a command synchronously and return its exit status and output.

        Args:
            cmd: Command and arguments
            timeout: Timeout in seconds

        Returns:
            Tuple of (returncode, stdout, stderr) or None if the command
            could not be run to completion
        """
        if not cmd or not isinstance(cmd, list):
            logger.error("Invalid command: must be a non-empty list")
            return None

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
                check=False,
            )
            return result.returncode, result.stdout, result.stderr
        except subprocess.TimeoutExpired:
            logger.error(f"Command timed out: {' '.join(cmd)}")
            return None
        except (OSError, subprocess.SubprocessError) as e:
            logger.error(f"Failed to run command {' '.join(cmd)}: {e}")
            return None
