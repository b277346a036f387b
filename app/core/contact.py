"""
Link de contacto por WhatsApp para la ficha de producto.
"""
import re
from typing import Optional
from urllib.parse import quote

from core.config import settings
from core.exceptions import ConfigurationError

# Caracteres que encodeURIComponent deja sin escapar
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_whatsapp_link(
    title: str,
    page_url: str,
    talle: Optional[str] = None,
    cantidad: int = 1,
    phone: Optional[str] = None
) -> str:
    """
    Arma el link wa.me con el mensaje prellenado.

    Ejemplo de mensaje:
        Hola, quiero consultar por *Remera Oversize* ( Talle: M. Cantidad: 2. https://...
    """
    digits = re.sub(r"\D", "", phone if phone is not None else settings.WHATSAPP_PHONE or "")
    if not digits:
        raise ConfigurationError("Número de WhatsApp del comercio no configurado")

    text = f"Hola, quiero consultar por *{title}* ( Talle: {talle or '-'}. Cantidad: {cantidad}. {page_url}"
    return f"https://wa.me/{digits}?text={quote(text, safe=_URI_COMPONENT_SAFE)}"


def product_page_url(product_id: str) -> str:
    return f"{settings.FRONTEND_URL.rstrip('/')}/productos/{product_id}"
