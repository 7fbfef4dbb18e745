"""Config commands -- view and modify the ocidist config file.

Provides the ``ocidist config`` sub-command group. Settings are persisted
as :class:`~ocidist.models.FileConfig` JSON in the ocidist config directory
and form the lowest-precedence layer of
:func:`~ocidist.config.resolve_client_config`.
"""

from __future__ import annotations

import typer

from ocidist.output import error, format_response, info, print_data, success

config_app = typer.Typer(no_args_is_help=True)


def _navigate(data: dict, key: str) -> tuple[dict, str]:
    """Walk a dot-separated key path, exiting with code 2 on unknown keys."""
    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=2)
        target = target[k]
    final_key = keys[-1]
    if final_key not in target or isinstance(target[final_key], dict):
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)
    return target, final_key


def _is_source(value: str) -> bool:
    return value.startswith(("env:", "file:"))


@config_app.command("show")
def config_show(
    show_secrets: bool = typer.Option(
        False, "--show-secrets", help="Print literal passwords and tokens."
    ),
) -> None:
    """Show the current config file contents.

    Literal secrets are masked unless ``--show-secrets`` is given;
    credential sources such as ``env:VAR`` are shown as written.
    """
    from ocidist.config import SECRET_FIELDS, config_path, load_file_config

    data = load_file_config().model_dump(mode="json")
    if not show_secrets:
        for field in SECRET_FIELDS:
            if data[field] and not _is_source(data[field]):
                data[field] = "****"
    info(f"Config file: {config_path()}")
    format_response(data)


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Config key (dot notation, e.g. 'transport.timeout')."),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    The value is coerced to the existing field's type (bool, float, or
    str) and the result is validated before saving.

    Example::

        ocidist config set endpoint https://registry.example.com
        ocidist config set token env:REGISTRY_TOKEN
        ocidist config set transport.timeout 10
    """
    from ocidist.config import load_file_config, save_file_config
    from ocidist.models import FileConfig

    data = load_file_config().model_dump(mode="json")
    target, final_key = _navigate(data, key)

    current = target[final_key]
    if isinstance(current, bool):
        coerced: object = value.lower() in ("true", "1", "yes")
    elif isinstance(current, (int, float)):
        try:
            coerced = float(value)
        except ValueError:
            error(f"Expected number for {key}, got: {value}")
            raise typer.Exit(code=2) from None
    else:
        coerced = value
    target[final_key] = coerced

    try:
        new_config = FileConfig.model_validate(data)
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_file_config(new_config)
    success(f"Set {key}")


@config_app.command("unset")
def config_unset(
    key: str = typer.Argument(help="Config key to reset to its default."),
) -> None:
    """Reset a single configuration value to its default."""
    from ocidist.config import load_file_config, save_file_config
    from ocidist.models import FileConfig

    data = load_file_config().model_dump(mode="json")
    target, final_key = _navigate(data, key)
    defaults = FileConfig().model_dump(mode="json")
    default_target, _ = _navigate(defaults, key)
    target[final_key] = default_target[final_key]

    save_file_config(FileConfig.model_validate(data))
    success(f"Unset {key}")


@config_app.command("path")
def config_path_command() -> None:
    """Print the path of the config file."""
    from ocidist.config import config_path

    print_data(str(config_path()))
