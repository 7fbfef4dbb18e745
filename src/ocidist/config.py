"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles persistent configuration for ocidist:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.ocidist/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Config file** -- a single :class:`~ocidist.models.FileConfig` JSON file
  holding the default endpoint, auth fields and transport settings.
* **Precedence resolution** -- :func:`resolve_client_config` merges explicit
  values, ``OCIDIST_*`` environment variables and the config file into the
  :class:`~ocidist.models.ClientConfig` handed to
  :func:`~ocidist.client.new_client`; :func:`resolve_transport_config`
  returns the file's :class:`~ocidist.models.TransportConfig` for
  :class:`~ocidist.client.RegistrySession`.
* **Credential sources** -- secrets in the config file may be written as
  ``env:VAR`` or ``file:/path``; see :func:`resolve_credential`.

No validation of auth coherence happens here: a merged config that mixes a
token from the environment with a username from the file is passed on as-is
and rejected by the client factory.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from ocidist.exceptions import ConfigError
from ocidist.models import ClientConfig, FileConfig, TransportConfig

_APP_NAME = "ocidist"
_CONFIG_FILENAME = "config.json"

ENV_PREFIX = "OCIDIST_"
CONFIG_FIELDS = ("endpoint", "username", "password", "token")
SECRET_FIELDS = ("password", "token")


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/ocidist/`` (default ``~/.config/ocidist/``).
    On macOS/Windows: ``~/.ocidist/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/ocidist/`` (default ``~/.local/share/ocidist/``).
    On macOS/Windows: ``~/.ocidist/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def config_path() -> Path:
    """Path to the config file."""
    return get_config_dir() / _CONFIG_FILENAME


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temp file lives in the same directory as *path* so ``os.replace`` is
    an atomic rename on POSIX. The file is created with mode 0600 because it
    may hold registry secrets.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        os.chmod(tmp_path, 0o600)
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Config file ---


def load_file_config() -> FileConfig:
    """Load the config file.

    Returns:
        The deserialised :class:`~ocidist.models.FileConfig`, or a default
        instance if the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = config_path()
    if not path.is_file():
        return FileConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return FileConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_file_config(config: FileConfig) -> None:
    """Persist *config* atomically to the config file."""
    data = config.model_dump(mode="json")
    _atomic_write(config_path(), json.dumps(data, indent=2) + "\n")


# --- Credential sources ---


def resolve_credential(value: str) -> str:
    """Resolve a secret that may be written as a credential source.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - anything else -- returned unchanged (a literal secret)

    Raises:
        ConfigError: If the variable is unset or the file cannot be read.
    """
    if value.startswith("env:"):
        var_name = value[4:]
        resolved = os.environ.get(var_name)
        if resolved is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {value})"
            )
        return resolved

    if value.startswith("file:"):
        path = Path(value[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {value})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    return value


# --- Precedence resolution ---


def resolve_client_config(
    endpoint: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    token: Optional[str] = None,
    use_file: bool = True,
) -> ClientConfig:
    """Merge all configuration layers into a :class:`~ocidist.models.ClientConfig`.

    Precedence (high to low), per field:
        1. Explicit arguments (CLI flags); ``None`` means "not given"
        2. Environment variables (``OCIDIST_ENDPOINT``, ``OCIDIST_USERNAME``,
           ``OCIDIST_PASSWORD``, ``OCIDIST_TOKEN``)
        3. Config file (secrets resolved via :func:`resolve_credential`)
        4. Empty string

    Args:
        use_file: Set to ``False`` to ignore the config file entirely.

    Raises:
        ConfigError: If the config file is invalid or a credential source
            cannot be resolved.
    """
    explicit = {
        "endpoint": endpoint,
        "username": username,
        "password": password,
        "token": token,
    }
    file_config = load_file_config() if use_file else FileConfig()

    merged: dict[str, str] = {}
    for field in CONFIG_FIELDS:
        value = explicit[field]
        if value is None:
            value = os.environ.get(f"{ENV_PREFIX}{field.upper()}") or None
        if value is None:
            value = getattr(file_config, field)
            if field in SECRET_FIELDS and value:
                value = resolve_credential(value)
        merged[field] = value
    return ClientConfig(**merged)


def resolve_transport_config(use_file: bool = True) -> TransportConfig:
    """Return the transport settings to hand to a :class:`~ocidist.client.RegistrySession`.

    Transport settings only come from the config file; without one (or with
    ``use_file=False``) the :class:`~ocidist.models.TransportConfig` defaults
    apply.

    Raises:
        ConfigError: If the config file is invalid.
    """
    if not use_file:
        return TransportConfig()
    return load_file_config().transport
