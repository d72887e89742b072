# gastos/infrastructure/external/openkm_adapter.py
import logging
from datetime import datetime
from typing import Optional

import requests
from lxml import etree

from config import ArchiveSettings
from gastos.domain.errors import ArchiveError, NotFoundError
from gastos.domain.models.document import ArchivedDocument, DownloadedDocument
from gastos.domain.ports.document_archive import DocumentArchive

logger = logging.getLogger(__name__)


def _file_name(doc_path: str) -> str:
    return doc_path.rsplit("/", 1)[-1]


def _parse_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "true"


def parse_document_xml(xml: bytes) -> ArchivedDocument:
    """
    Convierte el <document> que devuelve OpenKM en ArchivedDocument.
    Los campos que no se pueden convertir quedan en None.
    """
    try:
        root = etree.fromstring(xml)
    except etree.XMLSyntaxError as e:
        raise ArchiveError(f"Error al parsear respuesta XML: {e}") from e

    size_text = root.findtext("size")
    size = None
    if size_text:
        try:
            size = int(size_text)
        except ValueError:
            logger.warning(f"No se pudo parsear size: {size_text}")

    created_text = root.findtext("created")
    created = None
    if created_text:
        try:
            created = datetime.fromisoformat(created_text)
        except ValueError:
            logger.warning(f"No se pudo parsear created: {created_text}")

    document = ArchivedDocument(
        uuid=root.findtext("uuid"),
        path=root.findtext("path"),
        author=root.findtext("author"),
        mime_type=root.findtext("mimeType"),
        size=size,
        created=created,
        checksum=root.findtext("checksum"),
        locked=_parse_bool(root.findtext("locked")),
        convertible_to_pdf=_parse_bool(root.findtext("convertibleToPdf")),
    )
    logger.info(f"Documento parseado exitosamente - UUID: {document.uuid}")
    return document


class OpenKMAdapter(DocumentArchive):
    """Cliente REST de OpenKM con autenticación Basic."""

    def __init__(self, settings: ArchiveSettings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    def _url(self, endpoint: str) -> str:
        return self.settings.url.rstrip("/") + "/" + endpoint.lstrip("/")

    @property
    def _auth(self):
        return (self.settings.username, self.settings.password)

    def is_available(self) -> bool:
        return self.settings.is_valid()

    def upload(self, doc_path: str, content: bytes, mime_type: str) -> ArchivedDocument:
        url = self._url("/services/rest/document/createSimple")
        logger.info(f"Subiendo documento a OpenKM. Ruta: {doc_path}, {len(content)} bytes")

        files = {
            "content": (_file_name(doc_path), content, mime_type),
            "docPath": (None, doc_path, "text/plain"),
        }
        try:
            response = self.session.post(url, files=files, auth=self._auth, timeout=self.settings.timeout_seconds)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error de conexión con OpenKM: {e}", exc_info=True)
            raise ArchiveError(f"Error de conexión con OpenKM: {e}") from e

        logger.info(f"Respuesta HTTP: {response.status_code}")
        if not 200 <= response.status_code < 300:
            logger.error(f"Error HTTP {response.status_code}: {response.text}")
            raise ArchiveError(
                f"Error al subir documento: HTTP {response.status_code} - {response.text}",
                status_code=response.status_code,
            )
        return parse_document_xml(response.content)

    def download(self, doc_path: str) -> DownloadedDocument:
        url = self._url("/Download")
        logger.info(f"Descargando documento de OpenKM. Ruta: {doc_path}")
        try:
            response = self.session.get(
                url, params={"path": doc_path}, auth=self._auth, timeout=self.settings.timeout_seconds
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Error de conexión con OpenKM: {e}", exc_info=True)
            raise ArchiveError(f"Error de conexión con OpenKM: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(f"Documento no encontrado: {doc_path}")
        if not 200 <= response.status_code < 300:
            logger.error(f"Error HTTP {response.status_code}: {response.text}")
            raise ArchiveError(
                f"Error al descargar documento: HTTP {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        content_type = response.headers.get("Content-Type") or "application/octet-stream"
        content_type = content_type.split(";")[0].strip() or "application/octet-stream"
        logger.info(f"Documento descargado: {content_type}, {len(response.content)} bytes")
        return DownloadedDocument(content=response.content, content_type=content_type)
