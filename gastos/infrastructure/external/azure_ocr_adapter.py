# gastos/infrastructure/external/azure_ocr_adapter.py
import base64
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

import requests

from config import OcrSettings
from gastos.domain.errors import OcrError
from gastos.domain.ports.text_extractor import TextExtractor

logger = logging.getLogger(__name__)


class AzureOcrAdapter(TextExtractor):
    """
    Adaptador para Azure Document Intelligence (API REST).
    Paso 1: envía el documento en base64 al modelo configurado.
    Paso 2: consulta la Operation-Location hasta que el análisis termina.
    """

    def __init__(
        self,
        settings: OcrSettings,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings
        self._session = session
        self._lock = threading.Lock()
        self._sleep = sleep
        self._clock = clock

    def _get_session(self) -> requests.Session:
        # Se crea una única vez y se comparte entre requests concurrentes.
        if self._session is None:
            with self._lock:
                if self._session is None:
                    logger.info("Inicializando cliente de Azure Document Intelligence")
                    session = requests.Session()
                    session.headers.update({"Ocp-Apim-Subscription-Key": self.settings.api_key})
                    self._session = session
        return self._session

    def _analyze_url(self) -> str:
        endpoint = self.settings.endpoint.rstrip("/")
        return (
            f"{endpoint}/documentintelligence/documentModels/{self.settings.model}:analyze"
            f"?api-version={self.settings.api_version}"
        )

    def is_available(self) -> bool:
        return self.settings.is_valid()

    def extract_text(self, document: bytes) -> str:
        logger.info(f"Enviando documento de {len(document)} bytes a Azure Document Intelligence")
        try:
            text = self._collect_text(self._analyze(document))
        except OcrError:
            raise
        except (requests.exceptions.RequestException, ValueError, AttributeError, TypeError, KeyError) as e:
            logger.error(f"Error al procesar imagen con Azure OCR: {e}", exc_info=True)
            raise OcrError(f"Error al procesar imagen con Azure OCR: {e}") from e

        if not text:
            raise OcrError("No se pudo extraer texto de la imagen")

        logger.info(f"Texto extraído exitosamente. Longitud: {len(text)} caracteres")
        return text

    def _analyze(self, document: bytes) -> Dict[str, Any]:
        session = self._get_session()
        timeout = self.settings.timeout_seconds
        payload = {"base64Source": base64.b64encode(document).decode("utf-8")}

        # PASO 1: enviar el documento
        response = session.post(self._analyze_url(), json=payload, timeout=timeout)
        response.raise_for_status()
        operation_url = response.headers.get("Operation-Location")
        if not operation_url:
            raise OcrError("La respuesta de Azure no contiene 'Operation-Location'")

        # PASO 2: consultar el estado hasta que termine o venza el plazo
        deadline = self._clock() + timeout
        while True:
            poll = session.get(operation_url, timeout=timeout)
            poll.raise_for_status()
            body = poll.json()
            if not isinstance(body, dict):
                raise OcrError(f"Respuesta de Azure con formato inesperado: {type(body).__name__}")
            status = (body.get("status") or "").lower()

            if status == "succeeded":
                return body.get("analyzeResult") or {}
            if status == "failed":
                error = body.get("error") or {}
                raise OcrError(f"Azure no pudo analizar el documento: {error.get('message', 'sin detalle')}")

            if self._clock() >= deadline:
                raise OcrError(f"El análisis OCR superó el tiempo máximo de {timeout} segundos")
            self._sleep(self.settings.poll_interval_seconds)

    @staticmethod
    def _collect_text(result: Dict[str, Any]) -> str:
        content = result.get("content")
        if content:
            return content.strip()

        lines = [
            line.get("content", "")
            for page in result.get("pages") or []
            for line in page.get("lines") or []
        ]
        return "\n".join(lines).strip()
