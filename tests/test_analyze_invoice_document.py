# tests/test_analyze_invoice_document.py
import pytest

from gastos.application.use_cases.analyze_invoice_document import AnalyzeInvoiceDocumentUseCase
from gastos.domain.errors import ExtractionError, OcrError, ValidationError
from gastos.domain.models.extraction import InvoiceData, OcrAnalysis, Parsed

VALID_DOCUMENT = b"\xff\xd8" + b"0" * 2048


@pytest.fixture
def use_case(text_extractor, field_extractor):
    return AnalyzeInvoiceDocumentUseCase(text_extractor, field_extractor)


class TestValidation:
    """Las validaciones se resuelven antes de llamar a cualquier proveedor."""

    @pytest.mark.parametrize("document, content_type, message", [
        (None, "image/jpeg", "No se recibió archivo"),
        (b"", "image/jpeg", "vacío"),
        (b"0" * 512, "image/png", "pequeño"),
        (b"0" * (10 * 1024 * 1024 + 1), "application/pdf", "grande"),
        (VALID_DOCUMENT, "text/plain", "Tipo de archivo no soportado: text/plain"),
    ])
    def test_rejects_before_provider_call(self, use_case, text_extractor, field_extractor, document, content_type, message):
        with pytest.raises(ValidationError) as exc_info:
            use_case.execute(document, content_type)

        assert message in exc_info.value.message
        text_extractor.extract_text.assert_not_called()
        field_extractor.extract_fields.assert_not_called()

    def test_exactly_one_kib_is_accepted(self, use_case, text_extractor, field_extractor):
        text_extractor.extract_text.return_value = "texto"
        field_extractor.extract_fields.return_value = Parsed(InvoiceData())

        result = use_case.execute(b"0" * 1024, "image/png")
        assert result.status == "success"

    def test_content_type_match_is_case_insensitive(self, use_case, text_extractor, field_extractor):
        text_extractor.extract_text.return_value = "texto"
        field_extractor.extract_fields.return_value = Parsed(InvoiceData())

        result = use_case.execute(VALID_DOCUMENT, "Image/JPEG; charset=binary")
        assert result.status == "success"

    def test_missing_content_type_defaults_to_jpeg(self, use_case, text_extractor, field_extractor):
        text_extractor.extract_text.return_value = "texto"
        field_extractor.extract_fields.return_value = Parsed(InvoiceData())

        assert use_case.execute(VALID_DOCUMENT, None).status == "success"
        assert use_case.execute(VALID_DOCUMENT, "  ").status == "success"


class TestExecute:
    def test_success_assembles_analysis(self, use_case, text_extractor, field_extractor):
        text_extractor.extract_text.return_value = "RESTAURANTE EL SOL\nTOTAL S/ 45.50"
        fields = InvoiceData(
            vendor_name="Restaurante El Sol",
            invoice_date="2024-12-05",
            total_amount="45.50",
            currency="PEN",
        )
        field_extractor.extract_fields.return_value = Parsed(fields)

        result = use_case.execute(VALID_DOCUMENT, "image/jpeg")

        assert result.status == "success"
        assert result.ocr_text == "RESTAURANTE EL SOL\nTOTAL S/ 45.50"
        assert result.invoice_data == fields
        assert result.processing_time_ms >= 0
        assert result.error_message is None
        text_extractor.extract_text.assert_called_once_with(VALID_DOCUMENT)
        field_extractor.extract_fields.assert_called_once_with("RESTAURANTE EL SOL\nTOTAL S/ 45.50")

    def test_ocr_error_propagates(self, use_case, text_extractor, field_extractor):
        text_extractor.extract_text.side_effect = OcrError("No se pudo extraer texto de la imagen")

        with pytest.raises(OcrError):
            use_case.execute(VALID_DOCUMENT, "image/jpeg")
        field_extractor.extract_fields.assert_not_called()

    def test_extraction_error_propagates(self, use_case, text_extractor, field_extractor):
        text_extractor.extract_text.return_value = "texto"
        field_extractor.extract_fields.side_effect = ExtractionError("Falló después de 3 intentos")

        with pytest.raises(ExtractionError):
            use_case.execute(VALID_DOCUMENT, "image/jpeg")


class TestStatus:
    def test_healthy_when_both_available(self, use_case):
        status = use_case.status()
        assert status.status == "healthy"
        assert status.extraction_method == "AI"
        assert status.timestamp > 0

    def test_degraded_when_one_is_missing(self, use_case, text_extractor):
        text_extractor.is_available.return_value = False
        status = use_case.status()
        assert status.status == "degraded"
        assert status.ocr_service_available is False
        assert status.extraction_service_available is True


def test_error_analysis_has_no_data():
    analysis = OcrAnalysis.error("Servicio OCR no disponible")
    assert analysis.status == "error"
    assert analysis.error_message == "Servicio OCR no disponible"
    assert analysis.invoice_data is None
