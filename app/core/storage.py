"""
Servicio para las imágenes alojadas en Cloudinary.

Las subidas las hace el frontend directamente (ver core.signature). Desde el
servidor solo se borran imágenes, usando la Upload API firmada de Cloudinary.
"""
import asyncio
import logging
import time
from typing import Dict, Iterable, List, Optional

import httpx

from core.config import settings
from core.exceptions import ConfigurationError, MediaHostError
from core.signature import sign_params

logger = logging.getLogger(__name__)


class CloudinaryStorage:
    """Cliente mínimo de Cloudinary con un httpx.AsyncClient compartido."""

    def __init__(
        self,
        cloud_name: Optional[str] = None,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        # Los valores no indicados se leen de settings en cada uso
        self._cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret
        self._api_base = api_base
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def cloud_name(self) -> str:
        return self._cloud_name or settings.CLOUDINARY_CLOUD_NAME

    @property
    def api_key(self) -> str:
        return self._api_key or settings.CLOUDINARY_API_KEY

    @property
    def api_secret(self) -> str:
        return self._api_secret or settings.CLOUDINARY_API_SECRET

    @property
    def api_base(self) -> str:
        return (self._api_base or settings.CLOUDINARY_API_BASE).rstrip("/")

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout or settings.CLOUDINARY_TIMEOUT,
                transport=self._transport
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _require_credentials(self) -> None:
        if not self.cloud_name or not self.api_key or not self.api_secret:
            raise ConfigurationError("Credenciales de Cloudinary incompletas")

    async def destroy(self, public_id: str) -> Optional[Dict]:
        """
        Borrar una imagen de Cloudinary.

        Returns:
            Respuesta de Cloudinary, o None si no hay public_id

        Raises:
            MediaHostError: si Cloudinary falla o no confirma el borrado
        """
        if not public_id:
            return None
        self._require_credentials()

        params = {"public_id": public_id, "timestamp": int(time.time())}
        form = {
            **params,
            "api_key": self.api_key,
            "signature": sign_params(params, self.api_secret),
        }
        url = f"{self.api_base}/{self.cloud_name}/image/destroy"

        try:
            response = await self.client.post(url, data=form)
        except httpx.HTTPError as e:
            raise MediaHostError(f"Error de conexión con Cloudinary: {str(e)}")

        if response.status_code >= 400:
            raise MediaHostError(
                f"Cloudinary respondió {response.status_code} al borrar {public_id}"
            )

        body = response.json()
        if body.get("result") != "ok":
            raise MediaHostError(f"Cloudinary no borró {public_id}: {body.get('result')}")
        return body

    async def destroy_many(self, public_ids: Iterable[str]) -> List[Dict]:
        """
        Borrar varias imágenes en paralelo.

        Todas las llamadas se lanzan juntas y se espera a que terminen todas.
        Una falla no corta las demás: se loguea y queda en el resultado.

        Returns:
            Lista con {"public_id", "deleted", "error"} por imagen, en el mismo orden
        """
        ids = [public_id for public_id in public_ids if public_id]
        outcomes = await asyncio.gather(
            *(self.destroy(public_id) for public_id in ids),
            return_exceptions=True
        )

        results = []
        for public_id, outcome in zip(ids, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"Error borrando imagen {public_id}: {str(outcome)}")
                results.append({"public_id": public_id, "deleted": False, "error": str(outcome)})
            else:
                results.append({"public_id": public_id, "deleted": True, "error": None})
        return results

    async def ping(self) -> bool:
        """Verificar credenciales contra la Admin API de Cloudinary."""
        self._require_credentials()
        url = f"{self.api_base}/{self.cloud_name}/ping"
        try:
            response = await self.client.get(url, auth=(self.api_key, self.api_secret))
        except httpx.HTTPError as e:
            raise MediaHostError(f"Error de conexión con Cloudinary: {str(e)}")
        return response.status_code == 200


# Instancia singleton
storage_service = CloudinaryStorage()


def get_storage() -> CloudinaryStorage:
    """Dependency para FastAPI"""
    return storage_service
