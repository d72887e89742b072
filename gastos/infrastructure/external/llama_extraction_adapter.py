# gastos/infrastructure/external/llama_extraction_adapter.py
import json
import logging
import time
from typing import Any, Callable, Dict, Optional

import requests

from config import LlmSettings
from gastos.domain.errors import ExtractionError
from gastos.domain.models.extraction import (
    FALLBACK_INVOICE_DATA,
    NOT_FOUND,
    Fallback,
    InvoiceData,
    Parsed,
    ParseOutcome,
)
from gastos.domain.ports.field_extractor import FieldExtractor

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """You are an AI assistant that extracts information from invoices and receipts.

Extract ONLY the following 4 fields from this invoice/receipt text and return a valid JSON object:

Text: {text}

Extract these fields:
- vendor_name: Name of the business/company that issued the invoice
- invoice_date: Date of the invoice (format YYYY-MM-DD)
- total_amount: Total amount (numbers only, no currency symbols)
- currency: Currency used (USD, EUR, MXN, PEN, etc.)

Return ONLY this JSON format, no other text:
{{"vendor_name":"...","invoice_date":"...","total_amount":"...","currency":"..."}}

Use "Not found" for missing information.
"""

FIELD_DEFAULTS = {
    "vendor_name": NOT_FOUND,
    "invoice_date": NOT_FOUND,
    "total_amount": "0",
    "currency": NOT_FOUND,
}


def build_prompt(ocr_text: str) -> str:
    return PROMPT_TEMPLATE.format(text=ocr_text.replace('"', '\\"'))


def find_json_object(text: str) -> Optional[str]:
    """
    Devuelve el primer bloque {...} balanceado del texto, o None.
    Las llaves dentro de cadenas JSON (y las escapadas) no cuentan.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        char = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def parse_completion(body: str) -> ParseOutcome:
    """Interpreta la respuesta de chat completions. Nunca lanza: si algo falla devuelve Fallback."""
    try:
        envelope = json.loads(body)
        content = envelope["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        logger.warning(f"Respuesta del LLM con formato inesperado: {e}")
        return Fallback(FALLBACK_INVOICE_DATA, reason=f"Respuesta con formato inesperado: {e}")

    if content is not None and not isinstance(content, str):
        logger.warning(f"El contenido del LLM no es texto: {type(content).__name__}")
        return Fallback(FALLBACK_INVOICE_DATA, reason="El contenido del mensaje no es texto")

    block = find_json_object(content or "")
    if block is None:
        logger.warning("No se encontró un objeto JSON en la respuesta del LLM")
        return Fallback(FALLBACK_INVOICE_DATA, reason="No se encontró un objeto JSON en la respuesta")

    try:
        data = json.loads(block)
    except ValueError as e:
        logger.warning(f"El bloque JSON devuelto por el LLM no es válido: {e}")
        return Fallback(FALLBACK_INVOICE_DATA, reason=f"JSON inválido: {e}")
    if not isinstance(data, dict):
        return Fallback(FALLBACK_INVOICE_DATA, reason="El bloque JSON no es un objeto")

    fields: Dict[str, str] = {}
    for key, default in FIELD_DEFAULTS.items():
        value = data.get(key)
        fields[key] = default if value is None else _as_text(value)
    return Parsed(InvoiceData(**fields))


class LlamaExtractionAdapter(FieldExtractor):
    """
    Adaptador para el router de Hugging Face (chat completions, modelo Llama).
    Reintenta la llamada HTTP con espera lineal: delay * intento.
    """

    def __init__(
        self,
        settings: LlmSettings,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self.session = session or requests.Session()
        self._sleep = sleep

    @property
    def extraction_method(self) -> str:
        return "AI"

    def is_available(self) -> bool:
        return self.settings.is_valid()

    def extract_fields(self, ocr_text: str) -> ParseOutcome:
        if ocr_text is None or not ocr_text.strip():
            raise ExtractionError("El texto extraído está vacío o es nulo")

        logger.info(f"Iniciando extracción de datos con IA, texto de {len(ocr_text)} caracteres")
        payload = {
            "messages": [{"role": "user", "content": build_prompt(ocr_text)}],
            "model": self.settings.model,
            "stream": False,
            "max_tokens": self.settings.max_tokens,
            "temperature": self.settings.temperature,
        }
        body = self._post_with_retry(payload)

        outcome = parse_completion(body)
        if outcome.is_fallback:
            logger.warning(f"Se devolvieron valores por defecto: {outcome.reason}")
        else:
            logger.info(f"Datos extraídos: proveedor={outcome.fields.vendor_name}")
        return outcome

    def _post_with_retry(self, payload: Dict[str, Any]) -> str:
        max_attempts = self.settings.max_retry_attempts
        delay_ms = self.settings.retry_delay_ms
        last_error: Optional[Exception] = None

        for attempt in range(1, max_attempts + 1):
            try:
                return self._post(payload)
            except (requests.exceptions.RequestException, ExtractionError) as e:
                last_error = e
                logger.warning(f"Intento {attempt}/{max_attempts} falló: {e}")
                if attempt < max_attempts:
                    self._sleep(delay_ms * attempt / 1000.0)

        raise ExtractionError(f"Falló después de {max_attempts} intentos") from last_error

    def _post(self, payload: Dict[str, Any]) -> str:
        logger.info("Enviando petición a Hugging Face Router API")
        headers = {
            "Authorization": f"Bearer {self.settings.token}",
            "Content-Type": "application/json",
        }
        response = self.session.post(
            self.settings.api_url,
            json=payload,
            headers=headers,
            timeout=self.settings.timeout_seconds,
        )
        if response.status_code != 200:
            raise ExtractionError(f"Error en API de Hugging Face: {response.status_code} - {response.text}")
        return response.text
