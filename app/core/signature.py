"""
Firmas para subidas directas a Cloudinary.

El cliente sube la imagen directamente a Cloudinary con una firma generada
acá; el API secret nunca sale del servidor. Cloudinary rechaza firmas con un
timestamp viejo, así que cada firma vale solo por un rato.
"""
import hashlib
import time
from typing import Any, Dict, Mapping, Optional

from core.config import settings
from core.exceptions import ConfigurationError


def canonical_string(params: Mapping[str, Any]) -> str:
    """Parámetros ordenados por clave como `k=v` unidos con `&`, sin URL-encoding."""
    return "&".join(f"{key}={params[key]}" for key in sorted(params))


def sign_params(params: Mapping[str, Any], api_secret: str) -> str:
    """SHA-1 en hexadecimal (minúsculas) de la cadena canónica + secret."""
    if not api_secret:
        raise ConfigurationError("CLOUDINARY_API_SECRET no está configurado")
    to_sign = canonical_string(params) + api_secret
    return hashlib.sha1(to_sign.encode("utf-8")).hexdigest()


def build_upload_signature(
    folder: Optional[str] = None,
    use_preset: bool = False,
    timestamp: Optional[int] = None
) -> Dict[str, Any]:
    """
    Generar los datos que el frontend necesita para una subida firmada.

    Args:
        folder: Carpeta destino en Cloudinary (opcional)
        use_preset: Si True y hay preset configurado, se firma también `upload_preset`
        timestamp: Segundos epoch; por defecto el momento actual

    Returns:
        Dict con signature, timestamp, apiKey, cloudName, uploadPreset y folder
    """
    api_secret = settings.CLOUDINARY_API_SECRET
    if not api_secret:
        raise ConfigurationError("CLOUDINARY_API_SECRET no está configurado")

    if timestamp is None:
        timestamp = int(time.time())

    params: Dict[str, Any] = {"timestamp": timestamp}
    if folder:
        params["folder"] = folder
    if use_preset and settings.CLOUDINARY_UPLOAD_PRESET:
        params["upload_preset"] = settings.CLOUDINARY_UPLOAD_PRESET

    return {
        "signature": sign_params(params, api_secret),
        "timestamp": timestamp,
        "apiKey": settings.CLOUDINARY_API_KEY or None,
        "cloudName": settings.CLOUDINARY_CLOUD_NAME or None,
        "uploadPreset": settings.CLOUDINARY_UPLOAD_PRESET or None,
        "folder": folder or None,
    }


def get_unsigned_preset() -> Dict[str, str]:
    """Datos públicos para subidas sin firma (nunca incluye el secret)."""
    return {
        "cloudName": settings.CLOUDINARY_CLOUD_NAME or "",
        "uploadPreset": settings.CLOUDINARY_UPLOAD_PRESET or "",
    }
