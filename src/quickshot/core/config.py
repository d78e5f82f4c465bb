"""
Pipeline configuration.

Loads settings from environment variables (and a .env file through
python-dotenv) into a PipelineConfig that callers pass into the pipeline
explicitly. Core modules never read the environment themselves.

Sample Input/Output:

- Loading config:
  from quickshot.core.config import load_config
  config = load_config()
  config.target_size_bytes  # 4500000 unless QUICKSHOT_TARGET_SIZE_BYTES is set

- Running validation:
  python -m quickshot.core.config
"""
import os
import sys
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from dotenv import load_dotenv
from loguru import logger

from quickshot.core.constants import (
    BACKEND_AUTO,
    BACKEND_CHOICES,
    DEFAULT_TARGET_SIZE_BYTES,
    ENV_BACKEND,
    ENV_INSTANCE_NAME,
    ENV_TARGET_SIZE_BYTES,
    ENV_TEMP_DIR,
)
from quickshot.core.errors import InvalidInput


@dataclass(frozen=True)
class PipelineConfig:
    target_size_bytes: int = DEFAULT_TARGET_SIZE_BYTES
    backend: str = BACKEND_AUTO
    temp_dir: Optional[str] = None
    instance_name: str = ""

    def with_budget(self, target_size_bytes: Optional[int]) -> "PipelineConfig":
        """Copy with a per-request budget override (None keeps the default)."""
        if target_size_bytes is None:
            return self
        return replace(self, target_size_bytes=validate_target_size(target_size_bytes))


def validate_target_size(value) -> int:
    """Coerce a budget to int and reject non-positive values."""
    try:
        size = int(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"Target size must be an integer number of bytes, got {value!r}")
    if size <= 0:
        raise InvalidInput(f"Target size must be positive, got {size}")
    return size


def validate_backend(value: str) -> str:
    name = (value or BACKEND_AUTO).strip().lower()
    if name not in BACKEND_CHOICES:
        raise InvalidInput(
            f"Unknown backend {value!r}, expected one of {', '.join(BACKEND_CHOICES)}"
        )
    return name


def load_config(env: Optional[Mapping[str, str]] = None) -> PipelineConfig:
    """
    Build a PipelineConfig from the environment.

    Args:
        env: Mapping to read instead of os.environ (dotenv is skipped then)

    Returns:
        PipelineConfig: validated configuration
    """
    if env is None:
        load_dotenv()
        env = os.environ

    config = PipelineConfig(
        target_size_bytes=validate_target_size(
            env.get(ENV_TARGET_SIZE_BYTES, DEFAULT_TARGET_SIZE_BYTES)
        ),
        backend=validate_backend(env.get(ENV_BACKEND, BACKEND_AUTO)),
        temp_dir=env.get(ENV_TEMP_DIR) or None,
        instance_name=env.get(ENV_INSTANCE_NAME, ""),
    )
    logger.debug(f"Loaded pipeline config: {config}")
    return config


def get_instance_name(config: PipelineConfig) -> str:
    """Instance name of this process, empty string when unset."""
    return config.instance_name


if __name__ == "__main__":
    try:
        cfg = load_config()
    except InvalidInput as e:
        print(f"❌ Configuration invalid: {e}")
        sys.exit(1)
    print(f"✅ Configuration valid: {cfg}")
    sys.exit(0)
