# gastos/domain/models/money.py
from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

# Decimal en memoria y en BD; número (no string) en el JSON que consume el front.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
