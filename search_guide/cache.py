"""
Read-once document cache.

Each corpus owns one DocumentCache. The document is read on first use (or
eagerly via load()) and kept for the life of the process. A failed read is
never cached, so the next call tries the file again.
"""

import logging
from typing import Callable, Optional

from .models import DocumentLoadError

logger = logging.getLogger(__name__)

Loader = Callable[[str], str]


def read_text_file(path: str) -> str:
    """Default loader: read a UTF-8 file from disk."""
    with open(path, "r", encoding="utf-8") as handle:
        return handle.read()


class DocumentCache:
    """
    Lazily loaded, immutable copy of one guide.

    Concurrent first calls may each read the file.
    """

    def __init__(self, corpus: str, path: str, loader: Optional[Loader] = None):
        """
        Initialize the cache without touching the file.

        Args:
            corpus: Corpus name, used in errors and logs
            path: Location of the backing markdown file
            loader: Callable returning the text at a path. Defaults to a
                    plain UTF-8 file read; tests pass an in-memory loader.
        """
        self.corpus = corpus
        self.path = path
        self._loader = loader or read_text_file
        self._content: Optional[str] = None

    @property
    def is_loaded(self) -> bool:
        return self._content is not None

    def load(self) -> str:
        """
        Return the document, reading it on first call.

        Raises:
            DocumentLoadError: If the backing file cannot be read
        """
        if self._content is not None:
            return self._content

        try:
            content = self._loader(self.path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to load %s document from %s: %s", self.corpus, self.path, e)
            raise DocumentLoadError(self.corpus, self.path, str(e)) from e

        logger.info("Loaded %s document (%d characters)", self.corpus, len(content))
        self._content = content
        return content
