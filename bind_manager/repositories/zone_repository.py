"""Zone Repository - line-oriented storage for blacklist zone declarations."""
from typing import List, Optional, Tuple

from bind_manager.core.constants import BLOCKED_DB_PATH, ZONES_FILE_PATH
from bind_manager.repositories.file_utils import atomic_write

DECLARATION_TEMPLATE = 'zone "{domain}" {{type master; file "{blocked_db}";}};\n\n'


def parse_domain(line: str) -> Optional[str]:
    """Extract the domain from a declaration line.

    The second whitespace-separated token must be wrapped in double quotes,
    e.g. ``zone "example.com" {...};``. Anything else yields None.
    """
    parts = line.split()
    if len(parts) < 2:
        return None
    token = parts[1]
    if len(token) < 2 or not (token.startswith('"') and token.endswith('"')):
        return None
    return token.strip('"') or None


class ZoneRepository:
    """Reads and rewrites the blacklisted zones file."""

    def __init__(self, path: str = ZONES_FILE_PATH, blocked_db: str = BLOCKED_DB_PATH):
        self._path = path
        self._blocked_db = blocked_db

    @property
    def path(self) -> str:
        return self._path

    def read(self) -> str:
        """Return the raw file contents. A missing file raises FileNotFoundError."""
        with open(self._path, "r", encoding="utf-8") as f:
            return f.read()

    def list_domains(self, content: Optional[str] = None) -> List[str]:
        """Domains declared in the file, in file order."""
        if content is None:
            content = self.read()
        domains = []
        for line in content.splitlines():
            domain = parse_domain(line)
            if domain is not None:
                domains.append(domain)
        return domains

    def declaration(self, domain: str) -> str:
        return DECLARATION_TEMPLATE.format(domain=domain, blocked_db=self._blocked_db)

    def render_with(self, domain: str, content: Optional[str] = None) -> str:
        """File contents with a declaration for ``domain`` appended."""
        if content is None:
            content = self.read()
        if content and not content.endswith("\n"):
            content += "\n"
        return content + self.declaration(domain)

    def render_without(self, domain: str, content: Optional[str] = None) -> Tuple[str, bool]:
        """File contents without any declaration of ``domain``.

        Only lines whose parsed domain equals ``domain`` are dropped, together
        with the blank separator line that follows each of them. Comments and
        declarations of other domains containing ``domain`` as a substring stay.

        Returns:
            Tuple of (new contents, whether anything was removed)
        """
        if content is None:
            content = self.read()
        lines = content.splitlines(keepends=True)
        kept = []
        removed = False
        skip_separator = False
        for line in lines:
            if skip_separator:
                skip_separator = False
                if not line.strip():
                    continue
            if parse_domain(line) == domain:
                removed = True
                skip_separator = True
                continue
            kept.append(line)
        return "".join(kept), removed

    def append_declaration(self, domain: str) -> None:
        """Append a declaration without touching existing content."""
        # r+ so that a missing zones file is an error rather than a new file
        with open(self._path, "r+", encoding="utf-8") as f:
            content = f.read()
            if content and not content.endswith("\n"):
                f.write("\n")
            f.write(self.declaration(domain))

    def remove_declaration(self, domain: str) -> bool:
        """Rewrite the file without ``domain``. Returns whether it was present."""
        content, removed = self.render_without(domain)
        if removed:
            atomic_write(self._path, content)
        return removed
