"""Documentation extractor combining comment parsing and normalization.

This module provides the DocumentationExtractor class that reads source
files, runs the parser matching their language and normalizes the resulting
records into documentation entries.
"""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from fnmatch import fnmatch
from pathlib import Path

from .normalizer import DocumentationEntry, normalize
from .parser import CommentParser, CommentRecord, parse_python_source
from .utils.config import DoxnormConfig
from .utils.errors import FileAccessError, ParsingError, UnsupportedLanguageError

logger = logging.getLogger(__name__)

LANGUAGE_BY_SUFFIX = {
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    ".ts": "javascript",
    ".tsx": "javascript",
    ".py": "python",
    ".pyi": "python",
}


def detect_language(filename: str, configured: str = "auto") -> str:
    """Pick the parser language for ``filename``.

    Raises:
        UnsupportedLanguageError: If ``configured`` is ``auto`` and the
            extension is unknown
    """
    if configured != "auto":
        return configured
    language = LANGUAGE_BY_SUFFIX.get(Path(filename).suffix.lower())
    if language is None:
        raise UnsupportedLanguageError(
            f"Cannot determine the language of {filename}",
            recovery_hint="Set parser.language in the configuration",
        )
    return language


def normalize_source(
    source: str | Sequence[CommentRecord],
    filename: str,
    config: DoxnormConfig | None = None,
) -> list[DocumentationEntry]:
    """Normalize source text or already parsed records for one file.

    Args:
        source: Raw source text, or records from a comment parser
        filename: Name of the file, used to build identifiers
        config: Parser configuration; defaults are used when omitted

    Returns:
        Documentation entries for the file

    Raises:
        MissingClassError: If a constructor is documented without its class
        UnsupportedLanguageError: If the language of ``filename`` is unknown
    """
    if config is None:
        config = DoxnormConfig()

    if isinstance(source, str):
        options = config.parser.to_options()
        language = detect_language(filename, config.parser.language)
        if language == "python":
            records = parse_python_source(
                source, filename, options, style=config.parser.docstring_style
            )
        else:
            records = CommentParser().parse(source, options)
    else:
        records = list(source)

    return normalize(records, filename)


class DocumentationExtractor:
    """Reads source files and produces their documentation entries."""

    def __init__(self, config: DoxnormConfig | None = None) -> None:
        self.config = config or DoxnormConfig()

    def extract_source(self, source: str, filename: str) -> list[DocumentationEntry]:
        """Extract entries from source text already in memory."""
        return normalize_source(source, filename, self.config)

    def extract_file(self, file_path: str | Path) -> list[DocumentationEntry]:
        """Read a file and extract its entries.

        The file's base name is used for identifiers, so the same file
        yields the same identifiers wherever it is checked out.

        Raises:
            FileAccessError: If the file cannot be read
            ParsingError: If the file cannot be parsed
        """
        path = Path(file_path)
        source = _read_source(path)
        entries = self.extract_source(source, path.name)
        logger.info(f"Extracted {len(entries)} entries from {path}")
        return entries

    def extract_batch(
        self, file_paths: Sequence[str | Path]
    ) -> dict[str, list[DocumentationEntry]]:
        """Extract several files in parallel.

        Args:
            file_paths: Files to extract

        Returns:
            Entries keyed by file path, in the order the paths were given

        Raises:
            ParsingError: The first failure, in input order
        """
        max_workers = self.config.extractor.max_workers
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(self.extract_file, path) for path in file_paths]
            return {
                str(path): future.result()
                for path, future in zip(file_paths, futures)
            }

    def discover_files(self, root: str | Path) -> list[Path]:
        """List documentable files under ``root``, sorted by path."""
        root = Path(root)
        if root.is_file():
            return [root]
        if not root.is_dir():
            raise FileAccessError(
                f"File not found: {root}",
                recovery_hint="Check the path and ensure it exists",
            )

        extractor_config = self.config.extractor
        files = []
        for path in sorted(root.rglob("*")):
            if not path.is_file():
                continue
            relative = path.relative_to(root).as_posix()
            if not any(fnmatch(path.name, p) for p in extractor_config.include_patterns):
                continue
            if any(
                fnmatch(relative, p) or fnmatch(relative, f"*/{p}")
                for p in extractor_config.exclude_patterns
            ):
                logger.debug(f"Excluded {relative}")
                continue
            files.append(path)
        return files

    def extract_directory(
        self, root: str | Path
    ) -> dict[str, list[DocumentationEntry]]:
        """Discover and extract every documentable file under ``root``."""
        files = self.discover_files(root)
        if not files:
            logger.warning(f"No documentable files found in {root}")
            return {}
        return self.extract_batch(files)


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        error_msg = f"File not found: {path}"
        logger.error(error_msg)
        raise FileAccessError(
            error_msg, recovery_hint="Check the file path and ensure the file exists"
        )
    except PermissionError:
        error_msg = f"Permission denied: {path}"
        logger.error(error_msg)
        raise FileAccessError(
            error_msg, recovery_hint="Check file permissions and ensure read access"
        )
    except UnicodeDecodeError as e:
        try:
            source = path.read_text(encoding="latin-1")
        except OSError:
            error_msg = f"Encoding error in {path}: {e}"
            logger.error(error_msg)
            raise ParsingError(
                error_msg,
                recovery_hint="Ensure the file uses UTF-8 encoding or check file content",
            )
        logger.warning(f"File {path} decoded using latin-1 instead of utf-8")
        return source
