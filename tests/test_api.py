# tests/test_api.py
from datetime import date

from fastapi.testclient import TestClient

from gastos.domain.errors import OcrError
from gastos.domain.models.document import ArchivedDocument, DownloadedDocument
from gastos.domain.models.enums import InvoiceStatus
from gastos.domain.models.extraction import Fallback, FALLBACK_INVOICE_DATA, InvoiceData, Parsed
from main import app

JPEG = b"\xff\xd8" + b"0" * 4096


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_request_id_is_echoed(self, client):
        response = client.get("/", headers={"X-Request-Id": "abc123"})
        assert response.headers["X-Request-Id"] == "abc123"

    def test_request_id_is_generated(self, client):
        assert client.get("/").headers["X-Request-Id"]

    def test_unusable_request_id_is_replaced(self, client):
        incoming = "x" * 100
        response = client.get("/", headers={"X-Request-Id": incoming})
        assert response.headers["X-Request-Id"] != incoming
        assert len(response.headers["X-Request-Id"]) == 32

    def test_error_envelope_carries_request_id(self, client, seed):
        response = client.get("/api/cards/9999", headers={"X-Request-Id": "abc123"})

        assert response.status_code == 404
        assert response.json()["request_id"] == "abc123"
        assert response.headers["X-Request-Id"] == "abc123"

    def test_validation_envelope_carries_generated_request_id(self, client, seed):
        response = client.get("/api/cards/abc/expenses")

        assert response.status_code == 400
        assert response.json()["request_id"] == response.headers["X-Request-Id"]


class TestOcrEndpoint:
    def test_success(self, client, text_extractor, field_extractor):
        text_extractor.extract_text.return_value = "RESTAURANTE EL SOL"
        field_extractor.extract_fields.return_value = Parsed(InvoiceData(
            vendor_name="Restaurante El Sol", invoice_date="2024-12-05", total_amount="45.50", currency="PEN",
        ))

        response = client.post("/api/ocr", content=JPEG, headers={"Content-Type": "image/jpeg"})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["ocr_text"] == "RESTAURANTE EL SOL"
        assert body["invoice_data"] == {
            "vendorName": "Restaurante El Sol",
            "invoiceDate": "2024-12-05",
            "totalAmount": "45.50",
            "currency": "PEN",
        }
        assert body["error_message"] is None
        assert isinstance(body["processing_time_ms"], int)

    def test_fallback_still_returns_success(self, client, text_extractor, field_extractor):
        text_extractor.extract_text.return_value = "texto"
        field_extractor.extract_fields.return_value = Fallback(FALLBACK_INVOICE_DATA, reason="sin JSON")

        response = client.post("/api/ocr", content=JPEG, headers={"Content-Type": "image/png"})

        assert response.status_code == 200
        assert response.json()["invoice_data"]["vendorName"] == "Error al procesar"

    def test_unsupported_type_is_400(self, client, text_extractor):
        response = client.post("/api/ocr", content=JPEG, headers={"Content-Type": "text/plain"})

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "error"
        assert body["error_code"] == "INVALID_ARGUMENT"
        assert "text/plain" in body["message"]
        assert isinstance(body["timestamp"], int)
        text_extractor.extract_text.assert_not_called()

    def test_empty_body_is_400(self, client):
        response = client.post("/api/ocr", content=b"", headers={"Content-Type": "image/jpeg"})
        assert response.status_code == 400
        assert response.json()["message"] == "El archivo está vacío"

    def test_ocr_failure_is_500_envelope(self, client, text_extractor):
        text_extractor.extract_text.side_effect = OcrError("No se pudo extraer texto de la imagen")

        response = client.post("/api/ocr", content=JPEG, headers={"Content-Type": "image/jpeg"})

        assert response.status_code == 500
        assert response.json()["error_code"] == "OCR_ERROR"

    def test_unexpected_error_is_500_envelope(self, client, text_extractor):
        text_extractor.extract_text.side_effect = RuntimeError("conexión perdida")
        quiet_client = TestClient(app, raise_server_exceptions=False)

        response = quiet_client.post("/api/ocr", content=JPEG, headers={"Content-Type": "image/jpeg"})

        assert response.status_code == 500
        assert response.json()["error_code"] == "INTERNAL_ERROR"
        assert response.json()["message"] == "Error interno del servidor"

    def test_status(self, client, text_extractor):
        text_extractor.is_available.return_value = False

        body = client.get("/api/status").json()

        assert body["status"] == "degraded"
        assert body["ocr_service_available"] is False
        assert body["extraction_service_available"] is True
        assert body["extraction_method"] == "AI"


class TestCardExpensesEndpoints:
    def test_expense_groups(self, client, seed, add_expense):
        add_expense(date(2024, 12, 5), "100.10")
        add_expense(date(2025, 1, 3), "30.00", InvoiceStatus.PROCESSED)

        response = client.get(f"/api/cards/{seed.card.id}/expenses")

        assert response.status_code == 200
        groups = response.json()
        assert [g["month"] for g in groups] == ["Enero 2025", "Diciembre 2024"]
        assert groups[0]["status"] == "APROBADO"
        assert groups[1]["count"] == 1
        expense = groups[1]["expenses"][0]
        assert expense["icon"] == "cash"
        assert expense["vendorName"] == "Restaurante El Sol"
        assert expense["status"] == "DRAFT"
        assert "idInvoice" in expense
        assert isinstance(groups[1]["total"], float)
        assert groups[1]["total"] == 100.1
        assert isinstance(expense["totalAmount"], float)
        assert expense["totalAmount"] == 100.1

    def test_unknown_card_is_404(self, client, seed):
        response = client.get("/api/cards/9999/expenses")
        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_malformed_card_id_is_400(self, client, seed):
        response = client.get("/api/cards/abc/expenses")
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_approve(self, client, seed, add_expense):
        add_expense(date(2024, 12, 5), "100.10")
        add_expense(date(2024, 12, 20), "50.25")

        response = client.patch(f"/api/cards/{seed.card.id}/expenses/approve", params={"monthYear": "Diciembre 2024"})

        assert response.status_code == 200
        assert response.json()["updatedCount"] == 2
        assert "2 factura(s)" in response.json()["message"]

    def test_approve_without_label_is_400(self, client, seed):
        response = client.patch(f"/api/cards/{seed.card.id}/expenses/approve")
        assert response.status_code == 400

    def test_approve_unknown_card_is_404(self, client, seed):
        response = client.patch("/api/cards/9999/expenses/approve", params={"monthYear": "Diciembre 2024"})
        assert response.status_code == 404


class TestCardEndpoints:
    def _payload(self, seed, **overrides):
        payload = {
            "cardNumber": "5500000000000004",
            "holderName": "Ana Torres",
            "cardType": "CREDIT",
            "expirationDate": "2031-06-30",
            "issuerBank": "BBVA",
            "creditLimit": "5000.00",
            "userId": seed.user.id,
            "companyId": seed.company.id,
        }
        payload.update(overrides)
        return payload

    def test_create_masks_number(self, client, seed):
        response = client.post("/api/cards", json=self._payload(seed))

        assert response.status_code == 201
        body = response.json()
        assert body["maskedCardNumber"] == "**** **** **** 0004"
        assert body["status"] == "ACTIVE"
        assert "cardNumber" not in body
        assert body["creditLimit"] == 5000.0

    def test_duplicate_number_is_400(self, client, seed):
        response = client.post("/api/cards", json=self._payload(seed, cardNumber="4111111111111111"))
        assert response.status_code == 400

    def test_invalid_number_is_400(self, client, seed):
        response = client.post("/api/cards", json=self._payload(seed, cardNumber="1234"))
        assert response.status_code == 400

    def test_past_expiration_is_400(self, client, seed):
        response = client.post("/api/cards", json=self._payload(seed, expirationDate="2020-01-31"))
        assert response.status_code == 400

    def test_status_shortcuts(self, client, seed):
        assert client.patch(f"/api/cards/{seed.card.id}/block").json()["status"] == "BLOCKED"
        assert client.patch(f"/api/cards/{seed.card.id}/unblock").json()["status"] == "ACTIVE"
        assert client.patch(f"/api/cards/{seed.card.id}/status/SUSPENDED").json()["status"] == "SUSPENDED"

    def test_lookup_by_masked_number_and_user(self, client, seed):
        assert client.get(f"/api/cards/masked/{seed.card.masked_card_number}").json()["id"] == seed.card.id
        assert [c["id"] for c in client.get(f"/api/cards/user/{seed.user.id}").json()] == [seed.card.id]
        assert client.get("/api/cards/9999").status_code == 404

    def test_lookup_by_type_expiry_holder_and_bank(self, client, seed):
        client.post("/api/cards", json=self._payload(seed, holderName="Luis Rojas", expirationDate="2029-01-31"))

        assert [c["id"] for c in client.get("/api/cards/type/CORPORATE").json()] == [seed.card.id]
        assert [c["holderName"] for c in client.get("/api/cards/expiring-before/2030-01-01").json()] == ["Luis Rojas"]
        assert len(client.get("/api/cards/expiring-before/2031-01-01").json()) == 2
        assert client.get("/api/cards/expiring-before/31-12-2030").status_code == 400
        assert [c["issuerBank"] for c in client.get("/api/cards/search/bank", params={"name": "bbva"}).json()] == ["BBVA"]
        assert [c["id"] for c in client.get("/api/cards/search/holder", params={"name": "ANA"}).json()] == [seed.card.id]
        assert client.get("/api/cards/search/holder").status_code == 400


class TestInvoiceEndpoints:
    def _complete_payload(self, seed):
        return {
            "userId": seed.user.id,
            "companyId": seed.company.id,
            "countryId": seed.country.id,
            "cardId": seed.card.id,
            "path": "/okm:root/facturas/sol.jpg",
            "fileName": "sol.jpg",
            "vendorName": "Restaurante El Sol",
            "invoiceDate": "2024-12-05",
            "totalAmount": "45.50",
            "currency": "PEN",
        }

    def test_complete_create_and_update(self, client, seed):
        created = client.post("/api/invoices/complete", json=self._complete_payload(seed))
        assert created.status_code == 201
        body = created.json()
        assert body["status"] == "DRAFT"

        updated = client.put("/api/invoices/complete", json={
            "idInvoice": body["invoiceId"],
            "id": body["invoiceFieldId"],
            "notes": "Reunión de cierre",
        })
        assert updated.status_code == 200
        assert updated.json()["notes"] == "Reunión de cierre"
        assert updated.json()["vendorName"] == "Restaurante El Sol"

    def test_complete_update_unknown_is_404(self, client, seed):
        response = client.put("/api/invoices/complete", json={"idInvoice": 9999, "id": 9999})
        assert response.status_code == 404

    def test_complete_create_unknown_user_is_404(self, client, seed):
        payload = self._complete_payload(seed)
        payload["userId"] = 9999
        assert client.post("/api/invoices/complete", json=payload).status_code == 404

    def test_missing_required_field_is_400(self, client, seed):
        payload = self._complete_payload(seed)
        del payload["vendorName"]
        response = client.post("/api/invoices/complete", json=payload)
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_status_shortcuts_and_delete(self, client, seed, add_expense):
        invoice_id = add_expense(date(2024, 12, 5), "10.00").id

        assert client.patch(f"/api/invoices/{invoice_id}/approve").json()["status"] == "APPROVED"
        assert client.patch(f"/api/invoices/{invoice_id}/paid").json()["status"] == "PAID"
        assert client.get("/api/invoices/status/PAID").json()[0]["id"] == invoice_id

        assert client.delete(f"/api/invoices/{invoice_id}").status_code == 204
        assert client.get(f"/api/invoices/{invoice_id}").status_code == 404
        assert client.get(f"/api/invoice-fields/by-invoice/{invoice_id}").status_code == 404

    def test_invoice_field_is_unique_per_invoice(self, client, seed, add_expense):
        invoice = add_expense(date(2024, 12, 5), "10.00")

        response = client.post("/api/invoice-fields", json={
            "invoiceId": invoice.id,
            "vendorName": "Otro",
            "invoiceDate": "2024-12-06",
            "totalAmount": "1.00",
            "currency": "PEN",
        })
        assert response.status_code == 400
        assert client.get(f"/api/invoice-fields/by-invoice/{invoice.id}").json()["invoiceId"] == invoice.id

    def test_lists_by_owner_and_status(self, client, seed, add_expense):
        draft = add_expense(date(2024, 12, 5), "10.00")
        pending = add_expense(date(2024, 12, 6), "20.00", InvoiceStatus.PENDING)

        assert {i["id"] for i in client.get(f"/api/invoices/user/{seed.user.id}").json()} == {draft.id, pending.id}
        assert len(client.get(f"/api/invoices/company/{seed.company.id}").json()) == 2
        assert len(client.get(f"/api/invoices/country/{seed.country.id}").json()) == 2
        assert client.get("/api/invoices/user/9999").json() == []
        assert [i["id"] for i in client.get("/api/invoices/draft").json()] == [draft.id]
        assert [i["id"] for i in client.get("/api/invoices/pending").json()] == [pending.id]
        assert client.get("/api/invoices/approved").json() == []
        assert [i["id"] for i in client.get("/api/invoices", params={"user_id": seed.user.id, "status": "PENDING"}).json()] == [pending.id]

    def test_invoice_field_update_and_delete(self, client, seed, add_expense):
        invoice = add_expense(date(2024, 12, 5), "10.00")
        field_id = client.get(f"/api/invoice-fields/by-invoice/{invoice.id}").json()["id"]

        updated = client.put(f"/api/invoice-fields/{field_id}", json={"totalAmount": "60.50", "notes": "Almuerzo"})
        assert updated.status_code == 200
        assert updated.json()["totalAmount"] == 60.5
        assert updated.json()["notes"] == "Almuerzo"
        assert updated.json()["vendorName"] == "Restaurante El Sol"

        assert client.put(f"/api/invoice-fields/{field_id}", json={"categoryId": 9999}).status_code == 404
        assert client.put("/api/invoice-fields/9999", json={"notes": "x"}).status_code == 404

        assert client.delete(f"/api/invoice-fields/{field_id}").status_code == 204
        assert client.get(f"/api/invoice-fields/{field_id}").status_code == 404
        assert client.get(f"/api/invoices/{invoice.id}").status_code == 200

    def test_invoice_field_list_and_vendor_search(self, client, seed, add_expense):
        add_expense(date(2024, 12, 5), "10.00")

        assert len(client.get("/api/invoice-fields").json()) == 1
        assert [f["vendorName"] for f in client.get("/api/invoice-fields/by-vendor", params={"vendor": "el sol"}).json()] == [
            "Restaurante El Sol"
        ]
        assert client.get("/api/invoice-fields/by-vendor", params={"vendor": "tambo"}).json() == []
        assert client.get("/api/invoice-fields/by-vendor", params={"vendor": "  "}).status_code == 400
        assert client.get("/api/invoice-fields/by-vendor").status_code == 400


class TestCatalogEndpoints:
    def test_create_and_list_country(self, client, seed):
        created = client.post("/api/countries", json={"isoCode": "CL", "name": "Chile"})
        assert created.status_code == 201
        assert {c["isoCode"] for c in client.get("/api/countries").json()} == {"PE", "CL"}

    def test_duplicate_category_is_400(self, client, seed):
        response = client.post("/api/categories", json={"name": "Alimentación"})
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_ARGUMENT"

    def test_user_includes_company_and_country(self, client, seed):
        body = client.get(f"/api/users/{seed.user.id}").json()
        assert body["company"]["name"] == "Datum SAC"
        assert body["country"]["isoCode"] == "PE"
        assert body["role"] == "COLLABORATOR"

    def test_unknown_cost_center_is_404(self, client, seed):
        assert client.get("/api/cost-centers/9999").status_code == 404

    def test_update_country(self, client, seed):
        response = client.put(f"/api/countries/{seed.country.id}", json={"name": "República del Perú"})
        assert response.status_code == 200
        assert response.json() == {"id": seed.country.id, "isoCode": "PE", "name": "República del Perú"}

        client.post("/api/countries", json={"isoCode": "CL", "name": "Chile"})
        duplicate = client.put(f"/api/countries/{seed.country.id}", json={"isoCode": "CL"})
        assert duplicate.status_code == 400
        assert client.put(f"/api/countries/{seed.country.id}", json={"isoCode": "PE"}).status_code == 200
        assert client.put("/api/countries/9999", json={"name": "X"}).status_code == 404

    def test_lookups(self, client, seed):
        assert client.get("/api/countries/iso/PE").json()["id"] == seed.country.id
        assert client.get("/api/countries/iso/XX").status_code == 404
        assert client.get("/api/cost-centers/code/CC-001").json()["name"] == "Ventas"
        assert client.get("/api/users/email/ana.torres@datum.pe").json()["id"] == seed.user.id
        assert [c["id"] for c in client.get(f"/api/companies/by-country/{seed.country.id}").json()] == [seed.company.id]
        assert [u["id"] for u in client.get(f"/api/users/company/{seed.company.id}").json()] == [seed.user.id]

    def test_search_by_name(self, client, seed):
        assert [u["name"] for u in client.get("/api/users/search", params={"name": "ana"}).json()] == ["Ana Torres"]
        assert [c["name"] for c in client.get("/api/companies/search", params={"name": "datum"}).json()] == ["Datum SAC"]
        assert client.get("/api/cost-centers/search", params={"name": "compras"}).json() == []

        response = client.get("/api/users/search", params={"name": " "})
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_ARGUMENT"

    def test_category_activation(self, client, seed):
        category_id = seed.category.id

        assert client.patch(f"/api/categories/{category_id}/deactivate").json()["isActive"] is False
        assert client.get("/api/categories/active").json() == []
        assert client.patch(f"/api/categories/{category_id}/activate").json()["isActive"] is True
        assert [c["id"] for c in client.get("/api/categories/active").json()] == [category_id]

    def test_cost_center_update_and_activation(self, client, seed):
        cost_center_id = seed.cost_center.id

        updated = client.put(f"/api/cost-centers/{cost_center_id}", json={"name": "Ventas Lima"})
        assert updated.json()["name"] == "Ventas Lima"
        assert updated.json()["code"] == "CC-001"
        assert client.patch(f"/api/cost-centers/{cost_center_id}/deactivate").json()["isActive"] is False
        assert client.get("/api/cost-centers/active").json() == []

    def test_delete_unused_category(self, client, seed):
        assert client.delete(f"/api/categories/{seed.category.id}").status_code == 204
        assert client.get(f"/api/categories/{seed.category.id}").status_code == 404

    def test_delete_referenced_category_is_400(self, client, seed, add_expense):
        add_expense(date(2024, 12, 5), "10.00")

        response = client.delete(f"/api/categories/{seed.category.id}")

        assert response.status_code == 400
        assert "facturas" in response.json()["message"]
        assert client.get(f"/api/categories/{seed.category.id}").status_code == 200

    def test_delete_referenced_country_and_company_is_400(self, client, seed):
        assert client.delete(f"/api/countries/{seed.country.id}").status_code == 400
        assert client.delete(f"/api/companies/{seed.company.id}").status_code == 400

        spare = client.post("/api/companies", json={"name": "Sin personal SAC"}).json()
        assert client.delete(f"/api/companies/{spare['id']}").status_code == 204
        assert client.delete("/api/companies/9999").status_code == 404

    def test_user_status_changes(self, client, seed):
        user_id = seed.user.id

        assert client.patch(f"/api/users/{user_id}/suspend").json()["status"] == "SUSPENDED"
        assert client.get("/api/users/active").json() == []
        assert client.patch(f"/api/users/{user_id}/activate").json()["status"] == "ACTIVE"
        assert client.patch(f"/api/users/{user_id}/status/SUSPENDED").json()["status"] == "SUSPENDED"

    def test_delete_user_deactivates(self, client, seed):
        response = client.delete(f"/api/users/{seed.user.id}")

        assert response.status_code == 200
        assert response.json()["status"] == "INACTIVE"
        assert client.get(f"/api/users/{seed.user.id}").json()["status"] == "INACTIVE"
        assert client.get(f"/api/cards/{seed.card.id}").status_code == 200

    def test_update_user_email_must_be_unique(self, client, seed):
        other = client.post("/api/users", json={
            "email": "luis.rojas@datum.pe",
            "name": "Luis Rojas",
            "role": "COLLABORATOR",
            "companyId": seed.company.id,
            "countryId": seed.country.id,
        })
        assert other.status_code == 201

        response = client.put(f"/api/users/{other.json()['id']}", json={"email": "ana.torres@datum.pe"})
        assert response.status_code == 400
        renamed = client.put(f"/api/users/{other.json()['id']}", json={"name": "Luis A. Rojas", "role": "ADMIN"})
        assert renamed.json()["name"] == "Luis A. Rojas"
        assert client.put(f"/api/users/{seed.user.id}", json={"companyId": 9999}).status_code == 404


class TestDocumentEndpoints:
    def test_upload(self, client, document_archive):
        document_archive.upload.return_value = ArchivedDocument(
            uuid="2a3232fc", path="/okm:root/facturas/sol.jpg", mime_type="image/jpeg", size=4098,
        )

        response = client.post(
            "/api/documents/upload",
            files={"file": ("sol.jpg", JPEG, "image/jpeg")},
            data={"destinationPath": "okm:root/facturas"},
        )

        assert response.status_code == 201
        assert response.json()["documentId"] == "2a3232fc"
        document_archive.upload.assert_called_once_with("/okm:root/facturas/sol.jpg", JPEG, "image/jpeg")

    def test_upload_rejects_non_image(self, client, document_archive):
        response = client.post(
            "/api/documents/upload",
            files={"file": ("a.pdf", JPEG, "application/pdf")},
            data={"destinationPath": "/okm:root"},
        )
        assert response.status_code == 400
        document_archive.upload.assert_not_called()

    def test_download(self, client, document_archive):
        document_archive.download.return_value = DownloadedDocument(content=b"bytes", content_type="image/png")

        response = client.get("/api/documents/download", params={"path": "/okm:root/a.png"})

        assert response.status_code == 200
        assert response.content == b"bytes"
        assert response.headers["content-type"] == "image/png"

    def test_health(self, client):
        assert client.get("/api/documents/health").json()["status"] == "UP"
