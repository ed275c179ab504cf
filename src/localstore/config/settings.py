"""LocalStoreSettings: one frozen object for flags, env vars and TOML.

Sources, highest priority first:

1. keyword arguments (the CLI flags Click parsed)
2. ``LOCALSTORE_*`` environment variables, ``__`` between nested keys
   (``LOCALSTORE_CART__CURRENCY=US$``)
3. ``localstore.toml``, see :mod:`localstore.config.discovery`
4. defaults on the section models
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from localstore.config.discovery import find_config
from localstore.config.models import CartConfig, LoginConfig, PasswordConfig, StoreConfig

# TOML file for the settings object currently being built by from_cli().
_toml_file: ContextVar[Path | None] = ContextVar("localstore_toml_file", default=None)


def _toml_source(
    settings_cls: type[BaseSettings], path: Path | None
) -> PydanticBaseSettingsSource | None:
    if path is None:
        return None
    try:
        return TomlConfigSettingsSource(settings_cls, toml_file=path)
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


class LocalStoreSettings(BaseSettings):
    """Everything a command needs to know about this run.

    ``root`` is where the store lives: ``--root`` if given, else the directory
    holding the config file, else the working directory.  ``config_path`` is
    the TOML file that was read, if any.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="LOCALSTORE_",
        env_nested_delimiter="__",
    )

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # CLI flags
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    # [store], [cart], [login], [password]
    store: StoreConfig = Field(default_factory=StoreConfig)
    cart: CartConfig = Field(default_factory=CartConfig)
    login: LoginConfig = Field(default_factory=LoginConfig)
    password: PasswordConfig = Field(default_factory=PasswordConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources = [init_settings, env_settings]
        toml = _toml_source(settings_cls, _toml_file.get())
        if toml is not None:
            sources.append(toml)
        return tuple(sources)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **flags: Any,
    ) -> LocalStoreSettings:
        """Build the settings for one CLI invocation.

        An explicit *config_path* that does not exist means no TOML is read.
        Without one, ``localstore.toml`` is discovered from *root* (or the
        working directory) upwards.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(root)

        if root is None:
            root = toml_path.parent if toml_path is not None else Path.cwd()

        token = _toml_file.set(toml_path)
        try:
            return cls(root=root, config_path=toml_path, **flags)
        finally:
            _toml_file.reset(token)
