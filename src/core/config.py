"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El producer recibe un `AppSettings` explícito al construirse: nada de
  estado global leído en mitad de una petición.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Callable

from pydantic import Field, ImportString
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.timestamp_mode import TimestampMode


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "resx-http"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "resx-http"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "resx-http"
    return Path.home() / ".config" / "resx-http"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# resx-http user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración del producer HTTP.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - `access` acepta un callable o una ruta `"paquete.modulo:funcion"`, así la
      política de acceso también puede declararse desde el entorno.
    """

    model_config = SettingsConfigDict(
        env_prefix="RESX_HTTP_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    timestamp: TimestampMode = Field(
        default_factory=TimestampMode.default,
        description="Modo por defecto para el timestamp del recurso (server/client).",
    )
    access: ImportString[Callable[[Any], Any]] | None = Field(
        default=None,
        description=(
            "Callback RequestDescriptor -> RequestDescriptor | None. "
            "None en el resultado rechaza la petición."
        ),
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos), salvo override en `options`.",
    )
    user_agent: str = Field(
        default="resx-http/0.1",
        min_length=1,
        description="User-Agent enviado cuando la petición no define uno.",
    )
