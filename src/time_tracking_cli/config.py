# src/time_tracking_cli/config.py

"""Settings loaded once at startup from an XML config file and environment variables (+ optional .env).

Priority (lowest to highest):
- the XML config file (./config.xml unless TIMETRACK_CONFIG_PATH names another),
- TIMETRACK_* environment variables.

Environment variables:
- TIMETRACK_CONFIG_PATH: XML config file (default: ./config.xml).
- TIMETRACK_OUTPUT_PREFIX: output path and file name prefix.
- TIMETRACK_FILENAME_TIME_FORMAT: pattern for the start-time suffix of the file name.
- TIMETRACK_LOG_LEVEL: console log level (default: WARNING).
- TIMETRACK_LOG_DIR: directory for timetrack.log (default: .local/timetrack).
- TIMETRACK_ALT_SCREEN: use the terminal alternate screen (default: true).

Output prefix and filename pattern are required: each must come from the XML file or
its environment variable. A missing config file is fatal unless both variables are set.
"""

from __future__ import annotations

import os
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TIMETRACK"

DEFAULT_CONFIG_PATH = Path("config.xml")

XML_OUTPUT_PREFIX = "output_file_path_and_file_name"
XML_FILENAME_TIME_FORMAT = "date_time_format_to_append_in_output_file_name"

# Bracketed components accepted in the filename pattern, mapped to strftime directives.
_COMPONENTS = {
    "year": "%Y",
    "month": "%m",
    "day": "%d",
    "hour": "%H",
    "minute": "%M",
    "second": "%S",
    "weekday": "%A",
    "ordinal": "%j",
    "period": "%p",
}
_COMPONENT_RE = re.compile(r"\[([^\[\]]*)\]")


class ConfigError(Exception):
    """Startup configuration is missing or malformed."""


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def compile_filename_pattern(pattern: str) -> str:
    """
    Translate a filename pattern into a strftime format.

    Bracketed components ("[year]-[month]") and plain strftime directives ("%Y-%m")
    may be mixed. Raises ConfigError for empty patterns, unknown components and
    unbalanced brackets.
    """
    if not pattern or not pattern.strip():
        raise ConfigError("Filename time format is empty.")

    def repl(m: re.Match[str]) -> str:
        name = m.group(1).strip()
        try:
            return _COMPONENTS[name]
        except KeyError:
            known = ", ".join(f"[{c}]" for c in _COMPONENTS)
            raise ConfigError(
                f"Unknown component [{name}] in filename time format {pattern!r} (known: {known})."
            ) from None

    out = _COMPONENT_RE.sub(repl, pattern)
    if "[" in out or "]" in out:
        raise ConfigError(f"Unbalanced bracket in filename time format {pattern!r}.")
    return out


def _read_xml_config(path: Path, *, optional: tuple[str, ...] = ()) -> dict[str, str]:
    """
    Read the two config elements. An element listed in `optional` may be absent
    (an environment variable covers it); any other missing or empty element is fatal.
    """
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise ConfigError(f"Config file {path} is not valid XML: {e}") from e
    except OSError as e:
        raise ConfigError(f"Config file {path} could not be read: {e}") from e

    values: dict[str, str] = {}
    for key in (XML_OUTPUT_PREFIX, XML_FILENAME_TIME_FORMAT):
        node = root.find(key)
        text = node.text.strip() if node is not None and node.text is not None else ""
        if text:
            values[key] = text
        elif key not in optional:
            raise ConfigError(f"Config file {path} is missing <{key}>.")
    return values


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Output ----
    output_file_prefix: str
    filename_time_format: str

    # ---- Sources ----
    config_path: Path

    # ---- Logging / terminal ----
    log_level: str
    log_dir: Path
    alt_screen: bool

    @staticmethod
    def load(*, use_dotenv: bool = True) -> "Settings":
        if use_dotenv:
            load_dotenv(find_dotenv(usecwd=True), override=False)

        config_path = _env_path(_k("CONFIG_PATH"), DEFAULT_CONFIG_PATH)
        env_prefix = os.getenv(_k("OUTPUT_PREFIX"))
        env_format = os.getenv(_k("FILENAME_TIME_FORMAT"))

        covered: tuple[str, ...] = ()
        if env_prefix is not None:
            covered += (XML_OUTPUT_PREFIX,)
        if env_format is not None:
            covered += (XML_FILENAME_TIME_FORMAT,)

        xml_values: dict[str, str] = {}
        if config_path.exists():
            xml_values = _read_xml_config(config_path, optional=covered)
        elif len(covered) < 2:
            raise ConfigError(
                f"Config file {config_path} does not exist "
                f"(or set both {_k('OUTPUT_PREFIX')} and {_k('FILENAME_TIME_FORMAT')})."
            )

        output_file_prefix = env_prefix if env_prefix is not None else xml_values[XML_OUTPUT_PREFIX]
        filename_time_format = (
            env_format if env_format is not None else xml_values[XML_FILENAME_TIME_FORMAT]
        )
        if not output_file_prefix.strip():
            raise ConfigError("Output file prefix is empty.")
        # Fail before the session starts, not when the file name is built.
        compile_filename_pattern(filename_time_format)

        return Settings(
            output_file_prefix=output_file_prefix,
            filename_time_format=filename_time_format,
            config_path=config_path,
            log_level=_env(_k("LOG_LEVEL"), "WARNING"),
            log_dir=_env_path(_k("LOG_DIR"), Path(".local/timetrack")),
            alt_screen=_env_bool(_k("ALT_SCREEN"), True),
        )

    def output_path_for(self, started_at: datetime) -> Path:
        """Output CSV path: prefix + start time rendered with the filename pattern + '.csv'."""
        suffix = started_at.strftime(compile_filename_pattern(self.filename_time_format))
        if "/" in suffix or os.sep in suffix:
            raise ConfigError(
                f"Filename time format {self.filename_time_format!r} renders a path separator."
            )
        return Path(f"{self.output_file_prefix}{suffix}.csv").expanduser()
