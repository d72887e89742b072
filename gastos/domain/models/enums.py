# gastos/domain/models/enums.py
from enum import Enum


class _DisplayEnum(str, Enum):
    """Enum persistido por su nombre simbólico, con nombre en español para la UI."""

    def __new__(cls, value: str, display_name: str):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj._display_name = display_name
        return obj

    @property
    def display_name(self) -> str:
        return self._display_name


class InvoiceStatus(_DisplayEnum):
    DRAFT = ("DRAFT", "Borrador")
    PENDING = ("PENDING", "Pendiente")
    PROCESSING = ("PROCESSING", "Procesando")
    PROCESSED = ("PROCESSED", "Procesada")
    APPROVED = ("APPROVED", "Aprobada")
    REJECTED = ("REJECTED", "Rechazada")
    PAID = ("PAID", "Pagada")
    CANCELLED = ("CANCELLED", "Cancelada")
    ERROR = ("ERROR", "Error")


class CardStatus(_DisplayEnum):
    ACTIVE = ("ACTIVE", "Activa")
    INACTIVE = ("INACTIVE", "Inactiva")
    EXPIRED = ("EXPIRED", "Expirada")
    BLOCKED = ("BLOCKED", "Bloqueada")
    SUSPENDED = ("SUSPENDED", "Suspendida")
    CANCELLED = ("CANCELLED", "Cancelada")


class CardType(_DisplayEnum):
    CREDIT = ("CREDIT", "Crédito")
    DEBIT = ("DEBIT", "Débito")
    CORPORATE = ("CORPORATE", "Corporativa")
    PREPAID = ("PREPAID", "Prepagada")
    VIRTUAL = ("VIRTUAL", "Virtual")


class UserRole(_DisplayEnum):
    COLLABORATOR = ("COLLABORATOR", "Colaborador")
    ADMIN = ("ADMIN", "Administrador")


class UserStatus(_DisplayEnum):
    ACTIVE = ("ACTIVE", "Activo")
    INACTIVE = ("INACTIVE", "Inactivo")
    SUSPENDED = ("SUSPENDED", "Suspendido")
