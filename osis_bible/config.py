"""Configuration management for osis-bible."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


CONFIG_DIR = Path.home() / ".config" / "osis-bible"
CONFIG_FILE = CONFIG_DIR / "config.json"
DEFAULT_BIBLES_DIR = Path.home() / ".local" / "share" / "osis-bible"

# Version loaded when the display language switches
DEFAULT_VERSION_BY_LANGUAGE: Dict[str, str] = {"en": "kjv", "ar": "aravd"}


@dataclass
class VersionInfo:
    """Where one Bible version's sources live, relative to ``bibles_dir``."""

    name: str
    language: str
    books_dir: str
    fallback_file: Optional[str] = None
    books: Optional[List[str]] = None  # expected ids; None means the full canon

    def books_path(self, bibles_dir: Path) -> Path:
        return (bibles_dir / self.books_dir).expanduser()

    def fallback_path(self, bibles_dir: Path) -> Optional[Path]:
        if not self.fallback_file:
            return None
        return (bibles_dir / self.fallback_file).expanduser()

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "language": self.language,
            "books_dir": self.books_dir,
            "fallback_file": self.fallback_file,
            "books": self.books,
        }

    @classmethod
    def from_dict(cls, name: str, data: dict) -> "VersionInfo":
        """Create from dictionary."""
        return cls(
            name=name,
            language=data.get("language", "en"),
            books_dir=data.get("books_dir", f"{name}/books"),
            fallback_file=data.get("fallback_file"),
            books=data.get("books"),
        )


def _default_versions() -> Dict[str, VersionInfo]:
    return {
        "kjv": VersionInfo("kjv", "en", "kjv/books", "kjv/kjv.xml"),
        "aravd": VersionInfo("aravd", "ar", "aravd/books", "aravd/aravd.xml"),
        "arasvd": VersionInfo("arasvd", "ar", "arasvd/books", "arasvd/arasvd.xml"),
    }


@dataclass
class Config:
    """Application configuration."""

    language: str = "en"
    version: str = "kjv"
    bibles_dir: Path = DEFAULT_BIBLES_DIR
    fetch_timeout: Optional[float] = 10.0
    max_concurrency: int = 8
    yield_every: int = 1
    versions: Dict[str, VersionInfo] = field(default_factory=_default_versions)

    def version_info(self, name: Optional[str] = None) -> VersionInfo:
        """Return the settings of a version (the configured one by default).

        Raises:
            KeyError: If the version is not configured
        """
        name = name or self.version
        try:
            return self.versions[name]
        except KeyError:
            raise KeyError(f"Unknown Bible version: {name}") from None

    def resolve_version(self, language: str, preferred: Optional[str] = None) -> str:
        """Pick the version to load for a display language.

        A preferred version is kept only when it belongs to ``language``;
        otherwise the language's default version is used.
        """
        preferred = preferred or self.version
        info = self.versions.get(preferred)
        if info is not None and info.language == language:
            return preferred
        default = DEFAULT_VERSION_BY_LANGUAGE.get(language)
        if default in self.versions:
            return default
        for name, info in self.versions.items():
            if info.language == language:
                return name
        return preferred

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load config from file, or return defaults."""
        path = path or CONFIG_FILE
        if not path.exists():
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            versions = _default_versions()
            for name, raw in data.get("versions", {}).items():
                versions[name] = VersionInfo.from_dict(name, raw)
            return cls(
                language=data.get("language", "en"),
                version=data.get("version", "kjv"),
                bibles_dir=Path(data.get("bibles_dir", DEFAULT_BIBLES_DIR)).expanduser(),
                fetch_timeout=data.get("fetch_timeout", 10.0),
                max_concurrency=int(data.get("max_concurrency", 8)),
                yield_every=int(data.get("yield_every", 1)),
                versions=versions,
            )
        except (json.JSONDecodeError, OSError, TypeError, ValueError, AttributeError):
            return cls()

    def save(self, path: Optional[Path] = None) -> None:
        """Save config to file."""
        path = path or CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "language": self.language,
            "version": self.version,
            "bibles_dir": str(self.bibles_dir),
            "fetch_timeout": self.fetch_timeout,
            "max_concurrency": self.max_concurrency,
            "yield_every": self.yield_every,
            "versions": {name: info.to_dict() for name, info in self.versions.items()},
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
