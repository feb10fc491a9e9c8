"""Configuration management and environment variable utilities."""

import json
import os
from pathlib import Path

from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from blockhash_colors.exceptions import ConfigError
from blockhash_colors.helpers.constants import (
    DEFAULT_ALGORITHM,
    DEFAULT_CONFIG_PATH,
    DEFAULT_LATEST_BLOCK_ENDPOINT,
    DEFAULT_LIGHTNESS_RANGE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PALETTE_SIZE,
    DEFAULT_RPC_URL,
    DEFAULT_SATURATION_RANGE,
    DEFAULT_TIMEOUT,
    MAX_RETRIES,
    PIPELINE_RETRY_DELAY,
    RETRY_BACKOFF_MULTIPLIER,
    RETRY_BASE_DELAY,
    RETRY_MAX_DELAY,
)


# Load environment variables from .env file
load_dotenv()


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


class _ConfigSection(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class BlockchainConfig(_ConfigSection):
    """Where the latest block is fetched from."""

    rpc_url: str = Field(default=DEFAULT_RPC_URL, alias="rpcUrl", min_length=1)
    latest_block_endpoint: str = Field(
        default=DEFAULT_LATEST_BLOCK_ENDPOINT, alias="latestBlockEndpoint"
    )
    fetch_block_details: bool = Field(
        default=False,
        alias="fetchBlockDetails",
        description="Request /block/{hash} to enrich block metadata",
    )

    @property
    def latest_block_url(self) -> str:
        """Full URL of the latest-block endpoint."""
        return f"{self.rpc_url.rstrip('/')}{self.latest_block_endpoint}"


class RetryConfig(_ConfigSection):
    """Network retry policy of the hash source client."""

    max_retries: int = Field(default=MAX_RETRIES, alias="maxRetries", ge=0)
    initial_delay: float = Field(default=RETRY_BASE_DELAY, alias="initialDelay", ge=0)
    backoff_multiplier: float = Field(
        default=RETRY_BACKOFF_MULTIPLIER, alias="backoffMultiplier", ge=1
    )
    max_delay: float = Field(default=RETRY_MAX_DELAY, alias="maxDelay", ge=0)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)


class ColorDerivationConfig(_ConfigSection):
    """Parameters of the hash-to-palette mapping."""

    algorithm: Literal["sha256", "sha3_256"] = DEFAULT_ALGORITHM
    palette_size: int = Field(default=DEFAULT_PALETTE_SIZE, alias="paletteSize", ge=1)
    saturation_range: tuple[float, float] = Field(
        default=DEFAULT_SATURATION_RANGE, alias="saturationRange"
    )
    lightness_range: tuple[float, float] = Field(
        default=DEFAULT_LIGHTNESS_RANGE, alias="lightnessRange"
    )

    @field_validator("saturation_range", "lightness_range")
    @classmethod
    def _check_range(cls, value: tuple[float, float]) -> tuple[float, float]:
        low, high = value
        if not 0 <= low <= high <= 1:
            msg = f"Range must satisfy 0 <= low <= high <= 1, got {list(value)}"
            raise ValueError(msg)
        return value


class OutputConfig(_ConfigSection):
    """Which files the publisher writes and where."""

    public_dir: str = Field(default=DEFAULT_OUTPUT_DIR, alias="publicDir")
    css: bool = True
    json_output: bool = Field(default=True, alias="json")
    html: bool = True
    history_dir: str | None = Field(
        default=None,
        alias="historyDir",
        description="Directory receiving a timestamped JSON copy per run",
    )


class PipelineSettings(_ConfigSection):
    """Whole-run retry wrapper used by the orchestrator."""

    retries: int = Field(default=0, ge=0)
    retry_delay: float = Field(default=PIPELINE_RETRY_DELAY, alias="retryDelay", ge=0)


class PipelineConfig(_ConfigSection):
    """Complete configuration of one pipeline run."""

    blockchain: BlockchainConfig = Field(default_factory=BlockchainConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    color_derivation: ColorDerivationConfig = Field(
        default_factory=ColorDerivationConfig, alias="colorDerivation"
    )
    output: OutputConfig = Field(default_factory=OutputConfig)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)


def get_config_path(config_path: str | Path | None = None) -> Path:
    """Get the config file path from parameter, environment or default.

    Args:
        config_path: Optional path to use directly

    Returns:
        Path of the pipeline configuration file
    """
    if config_path:
        return Path(config_path)
    return Path(get_optional_env("BLOCKHASH_CONFIG") or DEFAULT_CONFIG_PATH)


def apply_env_overrides(config: PipelineConfig) -> PipelineConfig:
    """Apply BLOCKHASH_RPC_URL and BLOCKHASH_OUTPUT_DIR on top of a config.

    Args:
        config: Configuration loaded from file

    Returns:
        New configuration with environment values taking precedence
    """
    rpc_url = get_optional_env("BLOCKHASH_RPC_URL")
    output_dir = get_optional_env("BLOCKHASH_OUTPUT_DIR")

    if rpc_url:
        config = config.model_copy(
            update={
                "blockchain": config.blockchain.model_copy(update={"rpc_url": rpc_url})
            }
        )
    if output_dir:
        config = config.model_copy(
            update={
                "output": config.output.model_copy(update={"public_dir": output_dir})
            }
        )
    return config


def load_config(
    config_path: str | Path | None = None, *, use_env: bool = True
) -> PipelineConfig:
    """Load the pipeline configuration for a single run.

    A missing file is not an error when no explicit path was given: every
    section has defaults, so the pipeline can run unconfigured.

    Args:
        config_path: Optional path of the JSON config file
        use_env: Whether to apply environment overrides

    Returns:
        Validated, immutable configuration

    Raises:
        ConfigError: If the file is unreadable, not JSON or fails validation

    Example:
        ```python
        from blockhash_colors.helpers.config import load_config

        config = load_config("inputs/config.json")
        print(config.color_derivation.palette_size)
        ```
    """
    path = get_config_path(config_path)

    if path.exists():
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            msg = f"Failed to read config {path}: {e}"
            raise ConfigError(msg) from e
    elif config_path:
        msg = f"Config file not found: {path}"
        raise ConfigError(msg)
    else:
        raw = {}

    try:
        config = PipelineConfig.model_validate(raw)
    except ValidationError as e:
        msg = f"Invalid config {path}: {e}"
        raise ConfigError(msg) from e

    return apply_env_overrides(config) if use_env else config


__all__ = [
    "BlockchainConfig",
    "ColorDerivationConfig",
    "OutputConfig",
    "PipelineConfig",
    "PipelineSettings",
    "RetryConfig",
    "apply_env_overrides",
    "get_config_path",
    "get_optional_env",
    "load_config",
]
