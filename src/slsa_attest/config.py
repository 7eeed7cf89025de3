"""Configuration for the generator and the verifier.

Both pipelines take an explicit configuration object instead of reading
global state.  The same options can be supplied from a YAML file whose
keys keep the names used by the build plugins::

    outputJsonPath: target/attestations/hash.json
    runHashJarfile: true
    verifierPath: /usr/local/bin/slsa-verifier
    workDir: target/slsa
    verifierTimeout: 300

Classes
-------
- HashConfig       Options for the attestation generator.
- VerifierConfig   Options for the dependency provenance verifier.
- PluginConfig     Both of the above, as loaded from a file.
"""
from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_WORK_DIR: Path = Path("target") / "slsa"

_KNOWN_KEYS: frozenset[str] = frozenset(
    {"outputJsonPath", "runHashJarfile", "verifierPath", "workDir", "verifierTimeout"}
)


@dataclass(frozen=True)
class HashConfig:
    """Options for :class:`~slsa_attest.hashing.generator.HashGenerator`.

    Attributes
    ----------
    output_json_path:
        Explicit output file.  Empty means ``<target dir>/hash.json``.
    run_hash_jarfile:
        Execution gate.  When ``False`` the generator does nothing.
    """

    output_json_path: str = ""
    run_hash_jarfile: bool = False


@dataclass(frozen=True)
class VerifierConfig:
    """Options for :class:`~slsa_attest.verification.verifier.ProvenanceVerifier`.

    Attributes
    ----------
    verifier_path:
        Path to the external verifier executable.
    work_dir:
        Directory that receives downloaded provenance files and artifacts.
    timeout:
        Seconds to wait for one verifier process, or ``None`` to wait
        indefinitely.
    """

    verifier_path: str
    work_dir: Path = DEFAULT_WORK_DIR
    timeout: float | None = None

    def __post_init__(self) -> None:
        if not self.verifier_path:
            raise ValueError("verifierPath is required.")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"verifierTimeout must be > 0, got {self.timeout!r}.")


@dataclass(frozen=True)
class PluginConfig:
    """Options for both pipelines as read from a configuration file."""

    hashing: HashConfig = field(default_factory=HashConfig)
    verifier_path: str = ""
    work_dir: Path = DEFAULT_WORK_DIR
    verifier_timeout: float | None = None

    def require_verifier(self) -> VerifierConfig:
        """Return the verifier options, raising ValueError if incomplete."""
        return VerifierConfig(
            verifier_path=self.verifier_path,
            work_dir=self.work_dir,
            timeout=self.verifier_timeout,
        )


def load_config(path: Path) -> PluginConfig:
    """Load a :class:`PluginConfig` from a YAML file.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If the file has unknown keys or values of the wrong type.
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    return parse_config(path.read_text(encoding="utf-8"))


def parse_config(yaml_text: str) -> PluginConfig:
    """Parse configuration from a YAML string.  Empty input yields defaults."""
    try:
        data = yaml.safe_load(io.StringIO(yaml_text))
    except yaml.YAMLError as exc:
        raise ValueError(f"Configuration is not valid YAML: {exc}") from exc
    if data is None:
        return PluginConfig()
    if not isinstance(data, dict):
        raise ValueError("Configuration YAML must be a mapping.")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {unknown}")

    output_json_path = _expect(data, "outputJsonPath", str, "")
    run_hash_jarfile = _expect(data, "runHashJarfile", bool, False)
    verifier_path = _expect(data, "verifierPath", str, "")
    work_dir = _expect(data, "workDir", str, str(DEFAULT_WORK_DIR))

    timeout = data.get("verifierTimeout")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ValueError(f"verifierTimeout must be a number, got {timeout!r}.")
        if timeout <= 0:
            raise ValueError(f"verifierTimeout must be > 0, got {timeout!r}.")
        timeout = float(timeout)

    return PluginConfig(
        hashing=HashConfig(
            output_json_path=output_json_path,
            run_hash_jarfile=run_hash_jarfile,
        ),
        verifier_path=verifier_path,
        work_dir=Path(work_dir),
        verifier_timeout=timeout,
    )


def _expect(data: dict[str, object], key: str, kind: type, default: object) -> object:
    value = data.get(key, default)
    if value is None:
        return default
    if not isinstance(value, kind):
        raise ValueError(
            f"{key} must be of type {kind.__name__}, got {type(value).__name__}."
        )
    return value


__all__ = [
    "DEFAULT_WORK_DIR",
    "HashConfig",
    "PluginConfig",
    "VerifierConfig",
    "load_config",
    "parse_config",
]
