# --------------------------------------------------------------
# File: pipeline.py
# Description: Orquestación del flujo cifrar -> persistir -> descifrar -> verificar.
# --------------------------------------------------------------
"""Máquina de estados que ejecuta una pasada completa de cifrado de archivo."""

from __future__ import annotations

import logging
import os
from typing import Callable, Dict, Iterable, List, Optional

from aesfile import config
from aesfile.crypto_cbc import AesCbcCipher
from aesfile.errors import AesFileError, InvalidIvLengthError, IoError, StageError
from aesfile.keys import RandomSource, encode_key, generate_key, key_size_from_choice, validate_iv
from aesfile.models import STAGE_ORDER, ArtifactInfo, KeySize, RunReport, Stage
from aesfile.storage import read_file_bytes, write_file_bytes

__all__ = [
    "InputProvider",
    "FileReader",
    "FileWriter",
    "PipelineRunner",
    "scripted_input",
    "run_interactive",
]

logger = logging.getLogger(__name__)

InputProvider = Callable[[str], str]
FileReader = Callable[[str], bytes]
FileWriter = Callable[[str, bytes], None]
Notifier = Callable[[str], None]

KEY_SIZE_PROMPT = "Choose encryption key size (1: 128 bits, 2: 192 bits, 3: 256 bits): "
IV_PROMPT = "Enter a secret phrase for IV (16, 24, or 32 characters): "
IV_RETRY_PROMPT = "IV must be 16, 24, or 32 characters long. Please try again: "
PATH_PROMPT = "Enter the file path to encrypt: "


def _silent(_message: str) -> None:
    return None


def scripted_input(answers: Iterable[str]) -> InputProvider:
    """Crea un proveedor de entrada que responde con una secuencia fija.

    Args:
        answers (Iterable[str]): Respuestas en el orden en que se pedirán.

    Returns:
        InputProvider: Callable compatible con `input`; lanza EOFError al agotarse.

    """

    remaining = iter(list(answers))

    def _provider(prompt: str) -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError(f"No scripted answer left for prompt: {prompt!r}") from None

    return _provider


class PipelineRunner:
    """Recorre las etapas del pipeline en orden estricto y sin saltos.

    Cada ejecución posee en exclusiva su clave, su IV y los buffers en claro
    y cifrado; nada se comparte entre ejecuciones.

    Attributes:
        stage (Stage): Etapa pendiente de ejecutar.
        history (List[Stage]): Etapas completadas, en orden.

    """

    def __init__(
        self,
        input_provider: InputProvider,
        *,
        reader: FileReader = read_file_bytes,
        writer: FileWriter = write_file_bytes,
        random_source: RandomSource = os.urandom,
        notify: Optional[Notifier] = None,
        preview_bytes: Optional[int] = None,
    ) -> None:
        self._ask = input_provider
        self._reader = reader
        self._writer = writer
        self._random_source = random_source
        self._notify = notify or _silent
        self._preview_bytes = config.PREVIEW_BYTES if preview_bytes is None else preview_bytes

        self.stage = STAGE_ORDER[0]
        self.history: List[Stage] = []
        self.trace: List[str] = []

        self.key_size: Optional[KeySize] = None
        self.key: Optional[bytes] = None
        self.iv: Optional[bytes] = None
        self.path: Optional[str] = None
        self.plaintext: Optional[bytes] = None
        self.ciphertext: Optional[bytes] = None
        self.recovered: Optional[bytes] = None
        self._cipher: Optional[AesCbcCipher] = None
        self._artifacts: Dict[Stage, ArtifactInfo] = {}

        self._handlers: Dict[Stage, Callable[[], None]] = {
            Stage.CHOOSE_KEY_SIZE: self._choose_key_size,
            Stage.GENERATE_KEY: self._generate_key,
            Stage.ACQUIRE_IV: self._acquire_iv,
            Stage.READ_INPUT: self._read_input,
            Stage.ENCRYPT: self._encrypt,
            Stage.PERSIST_CIPHERTEXT: self._persist_ciphertext,
            Stage.DECRYPT: self._decrypt,
            Stage.PERSIST_RECOVERED: self._persist_recovered,
        }

    # ------------------------------------------------------------------
    # API pública
    # ------------------------------------------------------------------
    def step(self) -> Stage:
        """Ejecuta la etapa actual y avanza a la siguiente.

        Returns:
            Stage: Nueva etapa pendiente tras la transición.

        Raises:
            StageError: Si la etapa falla; el pipeline queda abortado.

        """

        if self.stage is Stage.DONE:
            return self.stage

        current = self.stage
        logger.debug("Entering stage %s", current.value)
        try:
            self._handlers[current]()
        except AesFileError as exc:
            logger.debug("Stage %s failed: %s", current.value, exc)
            raise StageError(current.label, exc) from exc

        self.history.append(current)
        self.stage = STAGE_ORDER[STAGE_ORDER.index(current) + 1]
        return self.stage

    def run(self) -> RunReport:
        """Ejecuta todas las etapas restantes y devuelve el informe final."""

        while self.stage is not Stage.DONE:
            self.step()
        return self.report()

    def report(self) -> RunReport:
        """Construye el informe de una ejecución terminada.

        Raises:
            RuntimeError: Si el pipeline todavía no ha llegado a DONE.

        """

        if self.stage is not Stage.DONE:
            raise RuntimeError(f"Pipeline not finished, pending stage: {self.stage.value}")
        return RunReport(
            variant=self._cipher.variant,
            key_hex=encode_key(self.key),
            iv_length=len(self.iv),
            plaintext_size=len(self.plaintext),
            ciphertext=self._artifacts[Stage.PERSIST_CIPHERTEXT],
            recovered=self._artifacts[Stage.PERSIST_RECOVERED],
            verified=self.recovered == self.plaintext,
            trace=list(self.trace),
            plaintext_preview=self._preview(self.plaintext),
            recovered_preview=self._preview(self.recovered),
        )

    # ------------------------------------------------------------------
    # Etapas
    # ------------------------------------------------------------------
    def _prompt(self, prompt: str) -> str:
        return self._ask(prompt).strip()

    def _preview(self, data: bytes) -> Optional[str]:
        if self._preview_bytes <= 0:
            return None
        return data[: self._preview_bytes].decode("utf-8", errors="replace")

    def _choose_key_size(self) -> None:
        self.key_size, defaulted = key_size_from_choice(self._prompt(KEY_SIZE_PROMPT))
        if defaulted:
            self._notify("Invalid choice, defaulting to 128 bits.")
        self.trace.append(f"[KEYSIZE] {self.key_size.bits} bits default={defaulted}")

    def _generate_key(self) -> None:
        self.key = generate_key(self.key_size.value, self._random_source)
        self._notify(
            f"Generated a random key of size {self.key_size.bits} bits: {encode_key(self.key)}"
        )
        self.trace.append(f"[KEYGEN] CSPRNG key={self.key_size.bits}-bit")

    def _acquire_iv(self) -> None:
        raw = self._prompt(IV_PROMPT)
        attempts = 1
        while True:
            try:
                self.iv = validate_iv(raw)
                break
            except InvalidIvLengthError as exc:
                logger.debug("Rejected IV: %s", exc)
                raw = self._prompt(IV_RETRY_PROMPT)
                attempts += 1
        self.trace.append(f"[IV] length={len(self.iv)} bytes attempts={attempts}")

    def _read_input(self) -> None:
        self.path = self._prompt(PATH_PROMPT)
        self.plaintext = self._reader(self.path)
        preview = self._preview(self.plaintext)
        if preview is not None:
            self._notify(f"File content: {preview!r}")
        self.trace.append(f"[READ] {self.path} size={len(self.plaintext)} bytes")

    def _encrypt(self) -> None:
        self._cipher = AesCbcCipher(self.key, self.iv)
        self.ciphertext = self._cipher.encrypt(self.plaintext)
        self.trace.append(
            f"[ENCRYPT] {self._cipher.variant.value}-CBC PKCS7 ct_len={len(self.ciphertext)} bytes"
        )

    def _check_target(self, target: str) -> None:
        """Impide que un artefacto sustituya al original o al otro artefacto."""

        protected = {os.path.abspath(self.path)}
        protected.update(os.path.abspath(info.path) for info in self._artifacts.values())
        if os.path.abspath(target) in protected:
            raise IoError(f"Refusing to overwrite {target}", path=target)

    def _persist_ciphertext(self) -> None:
        path = config.encrypted_path_for(self.path)
        self._check_target(path)
        self._writer(path, self.ciphertext)
        self._artifacts[Stage.PERSIST_CIPHERTEXT] = ArtifactInfo(path=path, size=len(self.ciphertext))
        self._notify(f"File encrypted and saved as: {path}")
        self.trace.append(f"[WRITE] {path} size={len(self.ciphertext)} bytes")

    def _decrypt(self) -> None:
        self.recovered = self._cipher.decrypt(self.ciphertext)
        verified = self.recovered == self.plaintext
        if not verified:
            logger.warning("Round-trip mismatch for %s", self.path)
        preview = self._preview(self.recovered)
        if preview is not None:
            self._notify(f"Decrypted content: {preview}")
        self.trace.append(f"[DECRYPT] pt_len={len(self.recovered)} bytes verified={verified}")

    def _persist_recovered(self) -> None:
        path = config.decrypted_path_for(self.path)
        self._check_target(path)
        self._writer(path, self.recovered)
        self._artifacts[Stage.PERSIST_RECOVERED] = ArtifactInfo(path=path, size=len(self.recovered))
        self._notify(f"Decrypted file saved as: {path}")
        self.trace.append(f"[WRITE] {path} size={len(self.recovered)} bytes")


def run_interactive(
    input_provider: Optional[InputProvider] = None,
    notify: Optional[Notifier] = None,
) -> RunReport:
    """Ejecuta el pipeline completo leyendo las respuestas de la consola."""

    return PipelineRunner(input_provider or input, notify=notify or print).run()
