"""
Endpoints para subir imágenes a Cloudinary desde el frontend.

El servidor no recibe archivos: firma los parámetros y el navegador sube
directo a https://api.cloudinary.com/v1_1/<cloud_name>/image/upload con
file, api_key, timestamp, signature (y folder / upload_preset si se firmaron).
"""
from fastapi import APIRouter, Body
from typing import Optional

from core.signature import build_upload_signature, get_unsigned_preset
from schemas.products import UploadSignatureRequest

router = APIRouter(
    prefix="/api",
    tags=["uploads"]
)


@router.post("/uploads")
async def create_upload_signature(
    payload: Optional[UploadSignatureRequest] = Body(None)
):
    """
    Generar firma para una subida firmada.

    - **folder**: carpeta destino (opcional)
    - **use_preset**: firmar también el upload preset configurado

    Falla con 500 si CLOUDINARY_API_SECRET no está configurado.
    """
    payload = payload or UploadSignatureRequest()
    signature = build_upload_signature(folder=payload.folder, use_preset=payload.use_preset)

    return {
        "success": True,
        "status_code": 200,
        "message": "Firma generada exitosamente",
        "data": signature
    }


@router.get("/cloudinary/preset")
async def get_cloudinary_preset():
    """
    Datos para subidas sin firma: solo cloudName y uploadPreset.
    """
    return {
        "success": True,
        "status_code": 200,
        "message": "Preset obtenido exitosamente",
        "data": get_unsigned_preset()
    }
