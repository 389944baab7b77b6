import base64
from io import BytesIO

import numpy as np
from fastapi.testclient import TestClient
from PIL import Image

from floodfill_service.api import app
from floodfill_service.encoding import PNG_DATA_URL_PREFIX

client = TestClient(app)


def _data_url():
    img = np.full((5, 8, 3), 255, dtype=np.uint8)
    img[2, 3:5] = (0, 128, 0)
    buf = BytesIO()
    Image.fromarray(img).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_remove_bg_returns_png_data_url():
    resp = client.post("/remove-bg", json={"imageData": _data_url(), "tolerance": 10})
    assert resp.status_code == 200
    body = resp.json()
    assert body["width"] == 8 and body["height"] == 5
    assert body["imageData"].startswith(PNG_DATA_URL_PREFIX)

    raw = base64.b64decode(body["imageData"][len(PNG_DATA_URL_PREFIX):])
    out = np.array(Image.open(BytesIO(raw)).convert("RGBA"))
    assert out[0, 0, 3] == 0
    assert out[2, 3, 3] == 255


def test_remove_bg_uses_default_tolerance():
    resp = client.post("/remove-bg", json={"imageData": _data_url()})
    assert resp.status_code == 200


def test_remove_bg_bad_payload_is_400():
    resp = client.post("/remove-bg", json={"imageData": "data:image/png;base64,!!!", "tolerance": 10})
    assert resp.status_code == 400
    assert "Failed to decode base64" in resp.json()["detail"]


def test_remove_bg_negative_tolerance_is_422():
    resp = client.post("/remove-bg", json={"imageData": _data_url(), "tolerance": -1})
    assert resp.status_code == 422


def test_remove_bg_tolerance_above_max_is_400():
    resp = client.post("/remove-bg", json={"imageData": _data_url(), "tolerance": 10_000})
    assert resp.status_code == 400


def test_remove_bg_feather_radius_above_max_is_422():
    resp = client.post("/remove-bg", json={"imageData": _data_url(), "featherRadius": 100_000})
    assert resp.status_code == 422


def test_remove_bg_accepts_feather_radius():
    resp = client.post("/remove-bg", json={"imageData": _data_url(), "tolerance": 10, "featherRadius": 3})
    assert resp.status_code == 200
