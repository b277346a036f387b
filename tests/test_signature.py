"""
Tests de firmas para subidas directas a Cloudinary.
"""
import hashlib

import pytest

from core.exceptions import ConfigurationError
from core.signature import build_upload_signature, canonical_string, sign_params


def sha1(text):
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


class TestSignParams:

    def test_cadena_canonica_ordenada_sin_encoding(self):
        params = {"timestamp": 1700000000, "folder": "productos/remeras", "upload_preset": "p"}
        assert canonical_string(params) == "folder=productos/remeras&timestamp=1700000000&upload_preset=p"

    def test_sha1_de_cadena_mas_secret(self):
        signature = sign_params({"timestamp": 1700000000, "folder": "productos"}, "secreto")
        assert signature == sha1("folder=productos&timestamp=1700000000secreto")
        assert signature == signature.lower()
        assert len(signature) == 40

    def test_determinista(self):
        params = {"timestamp": 1700000000, "folder": "productos"}
        assert sign_params(params, "secreto") == sign_params(dict(params), "secreto")

    def test_cambiar_cualquier_dato_cambia_la_firma(self):
        base = sign_params({"timestamp": 1700000000, "folder": "productos"}, "secreto")
        assert sign_params({"timestamp": 1700000001, "folder": "productos"}, "secreto") != base
        assert sign_params({"timestamp": 1700000000, "folder": "categorias"}, "secreto") != base
        assert sign_params({"timestamp": 1700000000, "folder": "productos"}, "otro") != base

    def test_secret_vacio(self):
        with pytest.raises(ConfigurationError):
            sign_params({"timestamp": 1}, "")


class TestBuildUploadSignature:

    def test_solo_timestamp(self, cloudinary_settings):
        data = build_upload_signature(timestamp=1700000000)
        assert data == {
            "signature": sha1("timestamp=1700000000secreto"),
            "timestamp": 1700000000,
            "apiKey": "123456789",
            "cloudName": "demo",
            "uploadPreset": "explosion_preset",
            "folder": None,
        }

    def test_con_folder_y_preset(self, cloudinary_settings):
        data = build_upload_signature(folder="productos", use_preset=True, timestamp=1700000000)
        assert data["signature"] == sha1("folder=productos&timestamp=1700000000&upload_preset=explosion_presetsecreto")
        assert data["folder"] == "productos"

    def test_use_preset_sin_preset_configurado(self, cloudinary_settings, monkeypatch):
        monkeypatch.setattr(cloudinary_settings, "CLOUDINARY_UPLOAD_PRESET", None)
        data = build_upload_signature(use_preset=True, timestamp=1700000000)
        assert data["signature"] == sha1("timestamp=1700000000secreto")
        assert data["uploadPreset"] is None

    def test_timestamp_actual(self, cloudinary_settings):
        data = build_upload_signature()
        assert isinstance(data["timestamp"], int)
        assert data["signature"] == sha1(f"timestamp={data['timestamp']}secreto")

    def test_sin_secret(self, cloudinary_settings, monkeypatch):
        monkeypatch.setattr(cloudinary_settings, "CLOUDINARY_API_SECRET", "")
        with pytest.raises(ConfigurationError):
            build_upload_signature()


class TestUploadEndpoints:

    def test_firma_sin_body(self, client, cloudinary_settings):
        response = client.post("/api/uploads")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["signature"] == sha1(f"timestamp={data['timestamp']}secreto")
        assert data["apiKey"] == "123456789"
        assert data["cloudName"] == "demo"
        assert data["folder"] is None
        assert "secreto" not in response.text

    def test_firma_con_folder(self, client, cloudinary_settings):
        response = client.post("/api/uploads", json={"folder": "productos", "use_preset": True})
        assert response.status_code == 200
        data = response.json()["data"]
        expected = sha1(f"folder=productos&timestamp={data['timestamp']}&upload_preset=explosion_presetsecreto")
        assert data["signature"] == expected
        assert data["folder"] == "productos"

    def test_campos_de_la_respuesta(self, client, cloudinary_settings):
        data = client.post("/api/uploads", json={}).json()["data"]
        assert sorted(data) == ["apiKey", "cloudName", "folder", "signature", "timestamp", "uploadPreset"]

    def test_use_preset_solo_con_true(self, client, cloudinary_settings):
        """"true", 1 o "yes" no activan el preset"""
        for value in ("true", 1, "yes"):
            response = client.post("/api/uploads", json={"use_preset": value})
            assert response.status_code == 200
            data = response.json()["data"]
            assert data["signature"] == sha1(f"timestamp={data['timestamp']}secreto")

    def test_folder_numerico(self, client, cloudinary_settings):
        response = client.post("/api/uploads", json={"folder": 5})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["folder"] == "5"
        assert data["signature"] == sha1(f"folder=5&timestamp={data['timestamp']}secreto")

    def test_sin_secret_configurado(self, client, cloudinary_settings, monkeypatch):
        monkeypatch.setattr(cloudinary_settings, "CLOUDINARY_API_SECRET", "")
        response = client.post("/api/uploads", json={})
        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "CONFIGURATION_ERROR"
        assert "signature" not in response.text

    def test_preset_publico(self, client, cloudinary_settings):
        response = client.get("/api/cloudinary/preset")
        assert response.status_code == 200
        assert response.json()["data"] == {"cloudName": "demo", "uploadPreset": "explosion_preset"}
        assert "secreto" not in response.text
        assert "123456789" not in response.text
