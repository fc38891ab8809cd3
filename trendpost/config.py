"""Key resolution, paths, constants, and typed settings."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from .catalog import DEFAULT_PROFILES, CategoryProfile, TopicCatalog

# ─────────────────────────────────────────────────────
# Home directory: logs live here
# ─────────────────────────────────────────────────────
HOME_DIR = Path(os.environ.get("TRENDPOST_HOME", Path.home() / ".trendpost"))
LOGS_DIR = HOME_DIR / "logs"
CONFIG_FILE = Path(os.environ.get("TRENDPOST_CONFIG", "blog-config.json"))

# ─────────────────────────────────────────────────────
# Generation defaults, overridden by config "generation"
# ─────────────────────────────────────────────────────
DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_MAX_TOKENS = 4000
DEFAULT_POSTS_PER_RUN = 2
DEFAULT_PAUSE_SECONDS = 2.0
DEFAULT_ATTEMPT_MULTIPLIER = 3
DEFAULT_POSTS_DIR = Path("content") / "posts"
DEFAULT_SUBREDDIT = "programming"


class ConfigError(RuntimeError):
    """Fatal setup problem: the run cannot start."""


@dataclass(frozen=True)
class GenerationSettings:
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    posts_per_run: int = DEFAULT_POSTS_PER_RUN
    pause_seconds: float = DEFAULT_PAUSE_SECONDS
    attempt_multiplier: int = DEFAULT_ATTEMPT_MULTIPLIER
    api_key: str = field(default="", repr=False)


@dataclass(frozen=True)
class Settings:
    """Everything read from the config file, loaded once at startup."""
    catalog: TopicCatalog
    profiles: MappingProxyType = field(default_factory=lambda: MappingProxyType(dict(DEFAULT_PROFILES)))
    generation: GenerationSettings = field(default_factory=GenerationSettings)
    posts_dir: Path = DEFAULT_POSTS_DIR
    subreddit: str = DEFAULT_SUBREDDIT
    author: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))

    def profile(self, category: str) -> CategoryProfile | None:
        return self.profiles.get(category)


# ─────────────────────────────────────────────────────
# API key resolution: env, then config file
# ─────────────────────────────────────────────────────
def _get_key(name: str, config: dict | None = None) -> str:
    """Resolve an API key: environment variable first, then the config file.

    `config` is an already-loaded config document; without one the default
    CONFIG_FILE is read.
    """
    val = os.environ.get(name)
    if val:
        return val
    if config is None:
        config = load_config()
    val = config.get(name)
    return val if isinstance(val, str) else ""


def get_anthropic_key(config: dict | None = None) -> str:
    return _get_key("ANTHROPIC_API_KEY", config)


def require_anthropic_key(generation: GenerationSettings | None = None) -> str:
    """The key from loaded settings if given, else from env/default config."""
    key = generation.api_key if generation is not None else get_anthropic_key()
    if not key:
        raise ConfigError(
            "No Anthropic API key found. Set ANTHROPIC_API_KEY in the environment "
            "or in the config file."
        )
    return key


def get_anthropic_client(api_key: str = ""):
    import anthropic

    return anthropic.Anthropic(api_key=api_key or require_anthropic_key())


# ─────────────────────────────────────────────────────
# Config file
# ─────────────────────────────────────────────────────
def load_config(path: Path | None = None) -> dict:
    """Load the raw config JSON; a missing or unreadable file yields {}."""
    path = Path(path) if path else CONFIG_FILE
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return {}
        if isinstance(data, dict):
            return data
    return {}


def _section(raw: dict, key: str, where: str = "") -> dict:
    """An optional object-valued key; absent or null means empty."""
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{where}{key!r} must be an object, got {type(value).__name__}")
    return value


def _strings(entry: dict, key: str, category: str) -> tuple:
    value = entry.get(key, ())
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"Profile {category!r}: {key!r} must be a list of strings")
    return tuple(value)


def _parse_profiles(raw: dict) -> MappingProxyType:
    profiles = dict(DEFAULT_PROFILES)
    for category, entry in raw.items():
        if not isinstance(entry, dict):
            raise ConfigError(f"Profile for {category!r} must be an object")
        name = entry.get("name", category)
        subreddit = entry.get("subreddit", "")
        if not isinstance(name, str) or not isinstance(subreddit, str):
            raise ConfigError(f"Profile {category!r}: name and subreddit must be strings")
        profiles[category] = CategoryProfile(
            name=name,
            github_topics=_strings(entry, "github", category),
            devto_tags=_strings(entry, "devto", category),
            subreddit=subreddit,
            keywords=_strings(entry, "keywords", category),
        )
    return MappingProxyType(profiles)


def _parse_generation(raw: dict, api_key: str = "") -> GenerationSettings:
    try:
        settings = GenerationSettings(
            model=str(raw.get("model", DEFAULT_MODEL)),
            max_tokens=int(raw.get("maxTokens", DEFAULT_MAX_TOKENS)),
            posts_per_run=int(raw.get("postsPerDay", DEFAULT_POSTS_PER_RUN)),
            pause_seconds=float(raw.get("pauseSeconds", DEFAULT_PAUSE_SECONDS)),
            attempt_multiplier=int(raw.get("attemptMultiplier", DEFAULT_ATTEMPT_MULTIPLIER)),
            api_key=api_key,
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid generation settings: {e}") from e
    if settings.posts_per_run < 1 or settings.attempt_multiplier < 1:
        raise ConfigError("postsPerDay and attemptMultiplier must be at least 1")
    return settings


def load_settings(path: Path | None = None) -> Settings:
    """Parse the config file into an immutable Settings value.

    The topic catalog is required; everything else falls back to defaults.
    The API key is resolved against this same file.
    """
    path = Path(path) if path else CONFIG_FILE
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigError(f"Could not read {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a JSON object")

    try:
        catalog = TopicCatalog.from_mapping(_section(raw, "topics"))
    except ValueError as e:
        raise ConfigError(str(e)) from e

    reddit = _section(_section(raw, "sources"), "reddit", "sources.")
    subreddit = reddit.get("subreddit", DEFAULT_SUBREDDIT)
    if not isinstance(subreddit, str) or not subreddit:
        raise ConfigError("sources.reddit.subreddit must be a non-empty string")
    posts_dir = raw.get("postsDir", str(DEFAULT_POSTS_DIR))
    if not isinstance(posts_dir, str) or not posts_dir:
        raise ConfigError("postsDir must be a non-empty string")

    return Settings(
        catalog=catalog,
        profiles=_parse_profiles(_section(raw, "profiles")),
        generation=_parse_generation(
            _section(raw, "generation"), api_key=get_anthropic_key(raw),
        ),
        posts_dir=Path(posts_dir),
        subreddit=subreddit,
        author=MappingProxyType(dict(_section(raw, "author"))),
    )
