# gastos/infrastructure/api/routers/invoices_router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from gastos.application.use_cases.complete_invoice import CompleteInvoiceUseCase
from gastos.application.use_cases.invoices import InvoiceFieldUseCase, InvoiceUseCase
from gastos.domain.errors import NotFoundError
from gastos.domain.models.enums import InvoiceStatus
from gastos.domain.models.invoice import (
    CompleteInvoice,
    CompleteInvoiceCreate,
    CompleteInvoiceUpdate,
    InvoiceCreate,
    InvoiceFieldCreate,
    InvoiceFieldOut,
    InvoiceFieldUpdate,
    InvoiceOut,
    InvoiceUpdate,
)
from gastos.infrastructure.api.dependencies import (
    get_complete_invoice_use_case,
    get_invoice_field_use_case,
    get_invoice_use_case,
)

router = APIRouter(prefix="/api/invoices", tags=["Facturas"])
fields_router = APIRouter(prefix="/api/invoice-fields", tags=["Campos de factura"])


@router.get("", response_model=List[InvoiceOut])
def list_invoices(
    card_id: Optional[int] = None,
    status: Optional[InvoiceStatus] = None,
    user_id: Optional[int] = None,
    company_id: Optional[int] = None,
    country_id: Optional[int] = None,
    use_case: InvoiceUseCase = Depends(get_invoice_use_case),
):
    return use_case.list_invoices(
        card_id=card_id, status=status, user_id=user_id, company_id=company_id, country_id=country_id,
    )


@router.get("/card/{card_id}", response_model=List[InvoiceOut])
def list_invoices_by_card(card_id: int, use_case: InvoiceUseCase = Depends(get_invoice_use_case)):
    return use_case.list_invoices(card_id=card_id)


@router.get("/user/{user_id}", response_model=List[InvoiceOut])
def list_invoices_by_user(user_id: int, use_case: InvoiceUseCase = Depends(get_invoice_use_case)):
    return use_case.list_invoices(user_id=user_id)


@router.get("/company/{company_id}", response_model=List[InvoiceOut])
def list_invoices_by_company(company_id: int, use_case: InvoiceUseCase = Depends(get_invoice_use_case)):
    return use_case.list_invoices(company_id=company_id)


@router.get("/country/{country_id}", response_model=List[InvoiceOut])
def list_invoices_by_country(country_id: int, use_case: InvoiceUseCase = Depends(get_invoice_use_case)):
    return use_case.list_invoices(country_id=country_id)


@router.get("/status/{status}", response_model=List[InvoiceOut])
def list_invoices_by_status(status: InvoiceStatus, use_case: InvoiceUseCase = Depends(get_invoice_use_case)):
    return use_case.list_invoices(status=status)


STATUS_LISTS = {
    "draft": InvoiceStatus.DRAFT,
    "pending": InvoiceStatus.PENDING,
    "processed": InvoiceStatus.PROCESSED,
    "approved": InvoiceStatus.APPROVED,
}


def _register_status_list(segment: str, status: InvoiceStatus) -> None:
    def list_by_fixed_status(use_case: InvoiceUseCase = Depends(get_invoice_use_case)):
        return use_case.list_invoices(status=status)

    router.add_api_route(
        f"/{segment}",
        list_by_fixed_status,
        methods=["GET"],
        response_model=List[InvoiceOut],
        name=f"list_{segment}_invoices",
    )


for _segment, _status in STATUS_LISTS.items():
    _register_status_list(_segment, _status)


@router.post("/complete", response_model=CompleteInvoice, status_code=201, summary="Crear factura con sus campos")
def create_complete_invoice(
    request: CompleteInvoiceCreate,
    use_case: CompleteInvoiceUseCase = Depends(get_complete_invoice_use_case),
):
    return use_case.create_complete(request)


@router.put("/complete", response_model=CompleteInvoice, summary="Actualizar factura y sus campos")
def update_complete_invoice(
    request: CompleteInvoiceUpdate,
    use_case: CompleteInvoiceUseCase = Depends(get_complete_invoice_use_case),
):
    result = use_case.update_complete(request)
    if result is None:
        raise NotFoundError(
            f"Factura {request.id_invoice} o campos de factura {request.id} no encontrados"
        )
    return result


@router.get("/{invoice_id}", response_model=InvoiceOut)
def get_invoice(invoice_id: int, use_case: InvoiceUseCase = Depends(get_invoice_use_case)):
    return use_case.get(invoice_id)


@router.post("", response_model=InvoiceOut, status_code=201)
def create_invoice(request: InvoiceCreate, use_case: InvoiceUseCase = Depends(get_invoice_use_case)):
    return use_case.create(request)


@router.put("/{invoice_id}", response_model=InvoiceOut)
def update_invoice(invoice_id: int, request: InvoiceUpdate, use_case: InvoiceUseCase = Depends(get_invoice_use_case)):
    return use_case.update(invoice_id, request)


@router.delete("/{invoice_id}", status_code=204)
def delete_invoice(invoice_id: int, use_case: InvoiceUseCase = Depends(get_invoice_use_case)):
    use_case.delete(invoice_id)
    return Response(status_code=204)


STATUS_SHORTCUTS = {
    "process": InvoiceStatus.PROCESSING,
    "approve": InvoiceStatus.APPROVED,
    "reject": InvoiceStatus.REJECTED,
    "paid": InvoiceStatus.PAID,
    "cancel": InvoiceStatus.CANCELLED,
}


def _register_shortcut(action: str, status: InvoiceStatus) -> None:
    def shortcut(invoice_id: int, use_case: InvoiceUseCase = Depends(get_invoice_use_case)):
        return use_case.change_status(invoice_id, status)

    router.add_api_route(
        f"/{{invoice_id}}/{action}",
        shortcut,
        methods=["PATCH"],
        response_model=InvoiceOut,
        name=f"{action}_invoice",
    )


for _action, _status in STATUS_SHORTCUTS.items():
    _register_shortcut(_action, _status)


# --- Campos de factura ---
@fields_router.post("", response_model=InvoiceFieldOut, status_code=201)
def create_invoice_field(request: InvoiceFieldCreate, use_case: InvoiceFieldUseCase = Depends(get_invoice_field_use_case)):
    return use_case.create(request)


@fields_router.get("", response_model=List[InvoiceFieldOut])
def list_invoice_fields(use_case: InvoiceFieldUseCase = Depends(get_invoice_field_use_case)):
    return use_case.list_all()


@fields_router.get("/by-vendor", response_model=List[InvoiceFieldOut])
def search_invoice_fields_by_vendor(
    vendor_name: Optional[str] = Query(None, alias="vendor", description="Texto a buscar en el proveedor"),
    use_case: InvoiceFieldUseCase = Depends(get_invoice_field_use_case),
):
    return use_case.search_by_vendor(vendor_name)


@fields_router.get("/by-invoice/{invoice_id}", response_model=InvoiceFieldOut)
def get_invoice_field_by_invoice(invoice_id: int, use_case: InvoiceFieldUseCase = Depends(get_invoice_field_use_case)):
    return use_case.get_by_invoice(invoice_id)


@fields_router.get("/{field_id}", response_model=InvoiceFieldOut)
def get_invoice_field(field_id: int, use_case: InvoiceFieldUseCase = Depends(get_invoice_field_use_case)):
    return use_case.get(field_id)


@fields_router.put("/{field_id}", response_model=InvoiceFieldOut)
def update_invoice_field(
    field_id: int,
    request: InvoiceFieldUpdate,
    use_case: InvoiceFieldUseCase = Depends(get_invoice_field_use_case),
):
    return use_case.update(field_id, request)


@fields_router.delete("/{field_id}", status_code=204)
def delete_invoice_field(field_id: int, use_case: InvoiceFieldUseCase = Depends(get_invoice_field_use_case)):
    use_case.delete(field_id)
    return Response(status_code=204)
