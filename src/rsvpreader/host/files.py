"""Read markdown from disk: a single file or a Logseq graph directory."""

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class FileSource:
    """DocumentSource backed by files.

    ``path`` is either a markdown file, which is the whole page, or a
    Logseq graph directory with ``pages/`` and ``journals/`` folders. In a
    graph, the default page is the most recent journal. Files have no
    selection.
    """

    def __init__(self, path: Path, encoding: str = "utf-8"):
        """Initialize the source.

        Args:
            path: Markdown file or graph directory

        Raises:
            FileNotFoundError: If path does not exist
        """
        self.path = Path(path).expanduser()
        self.encoding = encoding
        if not self.path.exists():
            raise FileNotFoundError(f"File not found: {self.path}")

    @property
    def is_graph(self) -> bool:
        return self.path.is_dir()

    def selected_text(self) -> Optional[str]:
        return None

    def page_text(self, name: Optional[str] = None) -> Optional[str]:
        page_file = self.find_page(name)
        if page_file is None:
            return None
        logger.debug("Reading %s", page_file)
        return page_file.read_text(encoding=self.encoding)

    def find_page(self, name: Optional[str] = None) -> Optional[Path]:
        """Locate the file for a page.

        Args:
            name: Page title in a graph; ignored for a single file

        Returns:
            Path of the page file, or None if there is no such page
        """
        if not self.is_graph:
            return self.path

        if name is None:
            journals = sorted((self.path / "journals").glob("*.md"))
            return journals[-1] if journals else None

        # Logseq stores namespace separators in file names as ___
        stem = name.replace("/", "___").lower()
        for folder in ("pages", "journals"):
            directory = self.path / folder
            if not directory.is_dir():
                continue
            for candidate in sorted(directory.glob("*.md")):
                if candidate.stem.lower() == stem:
                    return candidate
        return None
