"""
Vault Engine
=============

Central orchestrator for CyberVault. The :class:`VaultEngine` sits in front
of the crypto dispatcher, the password strength estimator and the password
generator, applies the per-operation defaults from configuration, adds
async file hashing, and wraps outcomes in the shared
:class:`~shared.models.ScanResult` model for the CLI and report layers.

Architecture follows the Facade pattern: callers get one object with a
small surface, and each component underneath stays a pure function over
strings and bytes.

Key material, passwords and plaintext are never written to the log.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from shared.config import ToolkitConfig
from shared.logger import ToolkitLogger
from shared.models import Finding, ScanResult, Severity

from vault.analyzers.password_generator import PasswordGenerator
from vault.analyzers.password_strength import PasswordStrengthEstimator
from vault.core.errors import ReadFailure, UnsupportedAlgorithm, VaultError
from vault.core.models import (
    CipherAlgorithm,
    CryptoRequest,
    CryptoResult,
    DigestAlgorithm,
    FileHashReport,
    GeneratedPassword,
    Operation,
    StrengthAssessment,
    StrengthTier,
)
from vault.crypto.dispatcher import ByteSource, CryptoDispatcher

_TOOL_NAME = "vault"

_LEGACY_CIPHERS = {
    CipherAlgorithm.DES: "DES uses a 56-bit key and is brute-forceable.",
    CipherAlgorithm.TRIPLE_DES: "Triple DES is deprecated (NIST SP 800-131A) and has a 64-bit block.",
    CipherAlgorithm.RC4: "RC4 keystream biases are exploitable (RFC 7465 prohibits it in TLS).",
    CipherAlgorithm.RC4_DROP: "RC4-drop mitigates early keystream bias but RC4 remains deprecated.",
}

_TIER_SEVERITY = {
    StrengthTier.WEAK: Severity.HIGH,
    StrengthTier.FAIR: Severity.MEDIUM,
    StrengthTier.GOOD: Severity.LOW,
    StrengthTier.STRONG: Severity.INFO,
}


def format_size(size: int) -> str:
    """Render a byte count as ``B`` / ``KB`` / ``MB`` / ``GB``."""
    if size < 1024:
        return f"{size} B"
    value = float(size)
    for unit in ("KB", "MB", "GB"):
        value /= 1024
        if value < 1024 or unit == "GB":
            break
    return f"{value:.2f} {unit}"


class VaultEngine:
    """Orchestrates every CyberVault operation.

    Usage::

        engine = VaultEngine()
        token = engine.encrypt("secret", key="k1")           # default: AES
        engine.decrypt(token, key="k1")
        engine.hash_text("abc")                              # default: SHA256
        report = await engine.hash_file(Path("iso.img"), expected="ab12...")
        engine.assess_password("abcdefgH1!")

    Attributes:
        config: Toolkit configuration instance.
        logger: Logger for the vault engine.
    """

    def __init__(self, config: Optional[ToolkitConfig] = None) -> None:
        self.config = config or ToolkitConfig()
        self.logger = ToolkitLogger.from_config("vault.engine", self.config)

        self._dispatcher = CryptoDispatcher(default_key=self.config.default_key)
        self._estimator = PasswordStrengthEstimator()
        self._generator = PasswordGenerator(
            min_length=self.config.generator.min_length,
            max_length=self.config.generator.max_length,
            estimator=self._estimator,
        )

    @property
    def dispatcher(self) -> CryptoDispatcher:
        return self._dispatcher

    # ------------------------------------------------------------------ #
    #  Crypto operations
    # ------------------------------------------------------------------ #

    def encrypt(
        self,
        text: str,
        algorithm: CipherAlgorithm | str | None = None,
        key: Optional[str] = None,
    ) -> str:
        """Encrypt *text*; *algorithm* defaults to the configured cipher."""
        algo = algorithm or self.config.vault.default_encrypt_algorithm
        with self.logger.operation("encrypt"):
            self.logger.debug("Encrypting %d chars with %s", len(text), algo)
            return self._logged(self._dispatcher.encrypt, text, algo, key)

    def decrypt(
        self,
        text: str,
        algorithm: CipherAlgorithm | str | None = None,
        key: Optional[str] = None,
    ) -> str:
        """Decrypt *text*; *algorithm* defaults to the configured cipher."""
        algo = algorithm or self.config.vault.default_encrypt_algorithm
        with self.logger.operation("decrypt"):
            self.logger.debug("Decrypting %d chars with %s", len(text), algo)
            return self._logged(self._dispatcher.decrypt, text, algo, key)

    def hash_text(self, text: str, algorithm: DigestAlgorithm | str | None = None) -> str:
        """Hash *text*; *algorithm* defaults to the configured digest."""
        algo = algorithm or self.config.vault.default_hash_algorithm
        with self.logger.operation("hash"):
            return self._logged(self._dispatcher.hash_text, text, algo)

    def hash_bytes(self, data: ByteSource, algorithm: DigestAlgorithm | str | None = None) -> str:
        """Hash raw bytes or a binary stream."""
        algo = algorithm or self.config.vault.default_file_hash_algorithm
        with self.logger.operation("hash_bytes"):
            return self._logged(self._dispatcher.hash_bytes, data, algo)

    def process(self, request: CryptoRequest) -> CryptoResult:
        """Run a request through the dispatcher without raising."""
        result = self._dispatcher.process(request)
        if not result.ok:
            self.logger.warning(
                "%s with %s failed: %s",
                request.operation.value,
                request.algorithm,
                result.error.value if result.error else "unknown",
            )
        return result

    async def hash_file(
        self,
        file_path: Path,
        algorithm: DigestAlgorithm | str | None = None,
        expected: Optional[str] = None,
    ) -> FileHashReport:
        """Hash a file and optionally compare against an expected digest.

        The blocking read runs in a worker thread; the coroutine resolves
        once with a report or raises once.

        Raises:
            UnsupportedAlgorithm: Digest not allowed for files.
            ReadFailure: Missing, unreadable or oversized file.
        """
        algo = DigestAlgorithm.parse(
            algorithm or self.config.vault.default_file_hash_algorithm, "file hash"
        )
        if not algo.supports_files:
            raise UnsupportedAlgorithm(algo, "file hash")

        path = Path(file_path)
        with self.logger.operation("hash_file"):
            with self.logger.timed(f"{algo.value} of {path.name}"):
                data = await asyncio.to_thread(self._read_file, path)
                digest = self._dispatcher.hash_bytes(data, algo)

        matches: Optional[bool] = None
        normalised_expected: Optional[str] = None
        if expected is not None and expected.strip():
            normalised_expected = expected.strip()
            matches = normalised_expected.lower() == digest.lower()

        return FileHashReport(
            file_name=path.name,
            file_size=len(data),
            size_display=format_size(len(data)),
            algorithm=algo,
            digest=digest,
            expected=normalised_expected,
            matches=matches,
        )

    # ------------------------------------------------------------------ #
    #  Password operations
    # ------------------------------------------------------------------ #

    def assess_password(self, password: str) -> StrengthAssessment:
        """Heuristic strength assessment; never raises."""
        return self._estimator.assess(password)

    def generate_password(
        self,
        length: Optional[int] = None,
        uppercase: Optional[bool] = None,
        lowercase: Optional[bool] = None,
        numbers: Optional[bool] = None,
        symbols: Optional[bool] = None,
    ) -> GeneratedPassword:
        """Generate a password, falling back to configured defaults."""
        gen = self.config.generator
        return self._generator.generate_assessed(
            length=gen.default_length if length is None else length,
            uppercase=gen.uppercase if uppercase is None else uppercase,
            lowercase=gen.lowercase if lowercase is None else lowercase,
            numbers=gen.numbers if numbers is None else numbers,
            symbols=gen.symbols if symbols is None else symbols,
        )

    # ------------------------------------------------------------------ #
    #  ScanResult wrappers (CLI / report layer)
    # ------------------------------------------------------------------ #

    def crypto_report(self, request: CryptoRequest) -> ScanResult:
        """Run *request* and describe the outcome as a ScanResult."""
        result = ScanResult(
            tool_name=_TOOL_NAME,
            target=f"{request.operation.value}:{request.algorithm}",
            start_time=datetime.now(timezone.utc),
        )
        outcome = self.process(request)
        result.metadata = outcome.model_dump(mode="json")

        if not outcome.ok:
            result.add_finding(Finding(
                severity=Severity.MEDIUM,
                title=f"{request.operation.value.capitalize()} failed",
                description=outcome.message,
                evidence={"error": outcome.error.value if outcome.error else ""},
            ))
            return result.finalize(f"Error: {outcome.message}")

        for finding in self._algorithm_findings(request):
            result.add_finding(finding)
        return result.finalize(
            f"{request.operation.value} with {request.algorithm}: "
            f"{len(outcome.output or '')} characters of output"
        )

    def password_report(self, password: str) -> ScanResult:
        """Assess *password* and describe the outcome as a ScanResult."""
        result = ScanResult(
            tool_name=_TOOL_NAME,
            target="[password]",
            start_time=datetime.now(timezone.utc),
        )
        assessment = self.assess_password(password)
        result.metadata = assessment.model_dump(mode="json")

        result.add_finding(Finding(
            severity=_TIER_SEVERITY[assessment.tier],
            title=f"Password Strength: {assessment.tier.label}",
            description=(
                f"Score {assessment.score}/8. "
                f"Estimated crack time: {assessment.crack_time}."
            ),
            evidence={"score": assessment.score, "tier": assessment.tier.value},
        ))
        for advice in assessment.feedback:
            result.add_finding(Finding(
                severity=Severity.INFO,
                title="Password Improvement Suggestion",
                description=advice,
            ))
        return result.finalize(
            f"Password strength: {assessment.tier.value}, score={assessment.score}/8"
        )

    async def file_report(
        self,
        file_path: Path,
        algorithm: DigestAlgorithm | str | None = None,
        expected: Optional[str] = None,
    ) -> ScanResult:
        """Hash a file and describe the outcome as a ScanResult."""
        result = ScanResult(
            tool_name=_TOOL_NAME,
            target=str(file_path),
            start_time=datetime.now(timezone.utc),
        )
        try:
            report = await self.hash_file(file_path, algorithm, expected)
        except VaultError as exc:
            self.logger.error("File hashing failed: %s", exc.message)
            result.add_finding(Finding(
                severity=Severity.MEDIUM,
                title="File Hashing Error",
                description=exc.message,
                evidence={"error": exc.kind.value},
            ))
            return result.finalize(f"Error: {exc.message}")

        result.metadata = report.model_dump(mode="json")
        if report.algorithm.is_legacy:
            result.add_finding(Finding(
                severity=Severity.LOW,
                title=f"Legacy Digest: {report.algorithm.label}",
                description=(
                    f"{report.algorithm.label} has practical collision attacks; "
                    "use it for integrity checks against accidental corruption only."
                ),
                recommendation="Prefer SHA-256 or SHA-512.",
            ))
        if report.matches is True:
            result.add_finding(Finding(
                severity=Severity.INFO,
                title="Digest Match",
                description="The computed digest matches the expected value.",
            ))
        elif report.matches is False:
            result.add_finding(Finding(
                severity=Severity.HIGH,
                title="Digest Mismatch",
                description=(
                    "The computed digest does not match the expected value. "
                    "The file may be corrupted or tampered with."
                ),
                evidence={"expected": report.expected, "actual": report.digest},
            ))
        return result.finalize(
            f"{report.algorithm.label} of {report.file_name} ({report.size_display})"
        )

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    def _logged(self, func, *args):  # type: ignore[no-untyped-def]
        try:
            return func(*args)
        except VaultError as exc:
            self.logger.debug("%s: %s", exc.kind.value, exc.message)
            raise

    def _read_file(self, file_path: Path) -> bytes:
        """Read the whole file, enforcing the configured size ceiling."""
        max_size = self.config.vault.max_file_size
        try:
            with open(file_path, "rb") as fh:
                data = fh.read(max_size + 1)
        except OSError as exc:
            raise ReadFailure(f"Failed to read file {file_path}: {exc}") from exc
        if len(data) > max_size:
            raise ReadFailure(
                f"File {file_path} exceeds the {format_size(max_size)} limit"
            )
        return data

    def _algorithm_findings(self, request: CryptoRequest) -> list[Finding]:
        findings: list[Finding] = []
        if request.operation is Operation.HASH:
            algo = DigestAlgorithm.parse(request.algorithm)
            if algo.is_legacy:
                findings.append(Finding(
                    severity=Severity.MEDIUM,
                    title=f"Legacy Digest: {algo.label}",
                    description=f"{algo.label} is not collision resistant.",
                    recommendation="Prefer SHA-256, SHA-512 or SHA-3.",
                ))
            return findings

        algo = CipherAlgorithm.parse(request.algorithm)
        if algo is CipherAlgorithm.BASE64:
            findings.append(Finding(
                severity=Severity.MEDIUM,
                title="Encoding Is Not Encryption",
                description="Base64 is a reversible encoding and provides no confidentiality.",
            ))
        elif algo in _LEGACY_CIPHERS:
            findings.append(Finding(
                severity=Severity.HIGH,
                title=f"Legacy Cipher: {algo.label}",
                description=_LEGACY_CIPHERS[algo],
                recommendation="Prefer AES-256.",
            ))
        if algo.requires_key and not request.key and self.config.default_key:
            findings.append(Finding(
                severity=Severity.HIGH,
                title="Built-in Default Key Used",
                description=(
                    "No key was supplied, so the configured fallback key was used. "
                    "Anyone with the configuration can decrypt the output."
                ),
                recommendation="Always supply an explicit key.",
            ))
        return findings
