from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from sns_output.runtime.output_worker_thread import OutputWorkerConfig
from sns_output.transport.sns_publisher import AwsConfig
from sns_output.transport.webhook_publisher import WebhookConfig, normalize_auth_header

CONFIG_ENV_VAR = "SNS_OUTPUT_CONFIG"


@dataclass(frozen=True)
class SnsConfig:
    """Destination settings."""
    arn: Optional[str] = None
    publish_boot_message_arn: Optional[str] = None
    abort_on_boot_failure: bool = False


@dataclass(frozen=True)
class CodecConfig:
    """Message body codec selection."""
    name: str = "json"
    format: Optional[str] = None


@dataclass(frozen=True)
class OutputConfig:
    """
    Root configuration loaded from YAML.

    ``webhook`` replaces the SNS publisher when set; ``aws`` is then unused.
    """
    sns: SnsConfig = field(default_factory=SnsConfig)
    codec: CodecConfig = field(default_factory=CodecConfig)
    aws: AwsConfig = field(default_factory=AwsConfig)
    webhook: Optional[WebhookConfig] = None
    worker: OutputWorkerConfig = field(default_factory=OutputWorkerConfig)
    log_level: str = "INFO"


def _read_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path.name} must contain a YAML mapping at the root")
    return data


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ValueError(f"'{name}' must be a mapping")
    return value


def _bool(section: Dict[str, Any], key: str, default: bool, where: str) -> bool:
    value = section.get(key, default)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"'{where}.{key}' must be true or false, got {value!r}")
    return value


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _resolve_default_config_path() -> Path:
    """
    Resolve config.yaml location.

    Priority:
    1) SNS_OUTPUT_CONFIG env var if provided
    2) ./config.yaml in current working directory
    """
    env = os.getenv(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser().resolve()
    return Path("config.yaml").resolve()


def load_credentials_file(path: Path) -> Dict[str, str]:
    """
    Read static AWS credentials from a YAML file.

    Recognised keys: ``access_key_id``, ``secret_access_key``, ``session_token``.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file is not a YAML mapping.
    """
    if not path.exists():
        raise FileNotFoundError(f"AWS credentials file not found: {path}")
    raw = _read_yaml(path)
    keys = ("access_key_id", "secret_access_key", "session_token")
    return {k: str(raw[k]) for k in keys if raw.get(k) is not None}


def _parse_aws(a: Dict[str, Any], base_dir: Path) -> AwsConfig:
    creds: Dict[str, str] = {}
    creds_file = _opt_str(a.get("credentials_file"))
    if creds_file:
        p = Path(creds_file).expanduser()
        creds = load_credentials_file(p if p.is_absolute() else base_dir / p)

    return AwsConfig(
        region=str(a.get("region") or os.getenv("AWS_REGION") or "us-east-1"),
        access_key_id=_opt_str(a.get("access_key_id")) or creds.get("access_key_id"),
        secret_access_key=_opt_str(a.get("secret_access_key")) or creds.get("secret_access_key"),
        session_token=_opt_str(a.get("session_token")) or creds.get("session_token"),
        profile=_opt_str(a.get("profile")),
        endpoint=_opt_str(a.get("endpoint")),
    )


def parse_output_config(raw: Dict[str, Any], base_dir: Optional[Path] = None) -> OutputConfig:
    """
    Convert a decoded YAML mapping into typed config objects.

    Parameters
    ----------
    raw
        Root mapping.
    base_dir
        Directory relative paths (credentials file) are resolved against.

    Raises
    ------
    ValueError
        If a section has the wrong shape or a value does not convert.
    """
    base_dir = base_dir or Path.cwd()

    # ---- destinations ----
    s = _section(raw, "sns")
    sns = SnsConfig(
        arn=_opt_str(s.get("arn")),
        publish_boot_message_arn=_opt_str(s.get("publish_boot_message_arn")),
        abort_on_boot_failure=_bool(s, "abort_on_boot_failure", False, "sns"),
    )

    # ---- codec ----
    c = _section(raw, "codec")
    codec = CodecConfig(
        name=str(c.get("name", "json")),
        format=_opt_str(c.get("format")),
    )

    # ---- transport ----
    aws = _parse_aws(_section(raw, "aws"), base_dir)

    webhook = None
    w = _section(raw, "webhook")
    if w:
        if not w.get("url"):
            raise ValueError("'webhook.url' is required when a webhook section is present")
        webhook = WebhookConfig(
            url=str(w["url"]),
            auth_header=normalize_auth_header(_opt_str(w.get("auth_header"))),
            timeout_s=float(w.get("timeout_s", 3.0)),
            verify_tls=_bool(w, "verify_tls", True, "webhook"),
        )

    # ---- worker pool ----
    k = _section(raw, "worker")
    worker = OutputWorkerConfig(
        threads=int(k.get("threads", 1)),
        max_queue=int(k.get("max_queue", 2000)),
        poll_timeout_s=float(k.get("poll_timeout_s", 0.5)),
    )
    if worker.threads < 1:
        raise ValueError("'worker.threads' must be at least 1")

    return OutputConfig(
        sns=sns,
        codec=codec,
        aws=aws,
        webhook=webhook,
        worker=worker,
        log_level=str(raw.get("log_level", "INFO")).upper(),
    )


def load_output_config(path: Optional[str] = None) -> OutputConfig:
    """
    Load output configuration from YAML.

    A ``.env`` file next to the config file is loaded first, so credentials
    read by boto3 from the environment can live there.

    Parameters
    ----------
    path
        Explicit path to config.yaml. If None, uses default resolution.

    Returns
    -------
    OutputConfig
        Parsed and validated configuration.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If required fields are missing or invalid.
    """
    cfg_path = Path(path).expanduser().resolve() if path else _resolve_default_config_path()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config not found: {cfg_path}")

    load_dotenv(cfg_path.parent / ".env")
    return parse_output_config(_read_yaml(cfg_path), base_dir=cfg_path.parent)
