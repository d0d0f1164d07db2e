from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import config
import main
from engine.imaging import decode_base64, encode_base64
from engine.pixels import PixelBuffer
from generation import PaletteManager
from store import JSONPaletteStore


@pytest.fixture
def client(tmp_path, monkeypatch) -> TestClient:
    monkeypatch.setattr(main, "palette_manager", PaletteManager(JSONPaletteStore(tmp_path)))
    return TestClient(main.app)


@pytest.fixture
def character_b64(character) -> str:
    return encode_base64(character)


def test_index(client) -> None:
    assert client.get("/").json() == {"status": "ok", "service": "sprite-style"}


def test_settings(client) -> None:
    data = client.get("/api/settings").json()
    assert data["default_seed"] == config.DEFAULT_SEED
    assert data["sprite_size"] == config.SPRITE_SIZE


def test_analyze(client, character_b64) -> None:
    resp = client.post("/api/analyze", json={"image": character_b64, "max_colors": 8})
    assert resp.status_code == 200
    data = resp.json()
    assert data["palette"]
    assert data["sources"][0].endswith("bytes>")
    assert data["style"]["colorCount"] > 0


def test_analyze_accepts_data_url(client, character_b64) -> None:
    resp = client.post("/api/analyze", json={"image": "data:image/png;base64," + character_b64})
    assert resp.status_code == 200


def test_analyze_rejects_bad_input(client) -> None:
    assert client.post("/api/analyze", json={"image": "!!not base64!!"}).status_code == 400
    assert client.post("/api/analyze", json={"image": "aGVsbG8="}).status_code == 400
    assert client.post("/api/analyze", json={}).status_code == 400
    resp = client.post("/api/analyze", content=b"{broken", headers={"content-type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["ok"] is False


def test_analyze_batch(client, character_b64) -> None:
    resp = client.post("/api/analyze/batch", json={
        "images": [character_b64, character_b64],
        "merge_strategy": "majority",
    })
    assert resp.status_code == 200
    sources = resp.json()["sources"]
    assert len(sources) == 2
    assert all(s.endswith("bytes>") for s in sources)

    empty = client.post("/api/analyze/batch", json={"images": []}).json()
    assert empty["palette"] == {}
    assert empty["sources"] == []


def test_generate_character(client) -> None:
    resp = client.post("/api/generate", json={"seed": 9})
    assert resp.status_code == 200
    data = resp.json()
    assert (data["width"], data["height"], data["seed"]) == (48, 48, 9)
    sprite = decode_base64(data["image"])
    assert sprite.is_opaque(24, 24)

    again = client.post("/api/generate", json={"seed": 9}).json()
    assert again["image"] == data["image"]


def test_generate_uses_default_seed(client) -> None:
    assert client.post("/api/generate", json={}).json()["seed"] == config.DEFAULT_SEED


def test_generate_item_with_style(client, character_b64) -> None:
    style = client.post("/api/analyze", json={"image": character_b64}).json()
    resp = client.post("/api/generate", json={
        "style": style,
        "descriptor": {"kind": "item", "item_type": "weapon", "weapon_type": "axe", "rarity": "epic", "size": 32},
        "seed": 3,
    })
    assert resp.status_code == 200
    assert (resp.json()["width"], resp.json()["height"]) == (32, 32)


def test_generate_rejects_out_of_range_fields(client) -> None:
    resp = client.post("/api/generate", json={"descriptor": {"outline_thickness": 9}})
    assert resp.status_code == 400


@pytest.mark.parametrize("style", [
    {"palette": {"cloth": ["#zzzzzz"]}},
    {"proportions": {"head": "x"}},
    {"equipment": {"helmet": True}},
    {"palette": ["#ff0000"]},
])
def test_malformed_style_is_a_client_error(client, character_b64, style) -> None:
    resp = client.post("/api/generate", json={"style": style, "seed": 1})
    assert resp.status_code == 400
    assert resp.json()["ok"] is False

    resp = client.post("/api/validate", json={"image": character_b64, "style": style})
    assert resp.status_code == 400


def test_hex_style_colours_are_accepted(client) -> None:
    resp = client.post("/api/generate", json={
        "style": {"palette": {"cloth": ["#ff0000"]}, "style": {"outlineColor": "#000"}},
        "seed": 1,
    })
    assert resp.status_code == 200


def test_generate_with_class_glow(client) -> None:
    plain = client.post("/api/generate", json={"seed": 5, "descriptor": {"class_id": "mage"}}).json()
    glowing = client.post("/api/generate", json={"seed": 5, "descriptor": {"class_id": "mage", "glow": True}}).json()
    assert glowing["image"] != plain["image"]


def test_validate(client, character_b64) -> None:
    resp = client.post("/api/validate", json={"image": character_b64})
    assert resp.status_code == 200
    data = resp.json()
    assert set(data) == {"valid", "issues", "details"}
    assert data["details"]["proportions"]["valid"] is True


def test_variations(client, character_b64) -> None:
    resp = client.post("/api/variations", json={"image": character_b64, "count": 3, "seed": 42})
    assert resp.status_code == 200
    data = resp.json()
    assert [v["seed"] for v in data] == [42, 1042, 2042]
    assert all(v["valid"] for v in data)


def test_variations_without_jitter_return_the_base(client, character, character_b64) -> None:
    resp = client.post("/api/variations", json={
        "image": character_b64, "count": 1, "color_variation": 0, "size_variation": 0,
    })
    assert decode_base64(resp.json()[0]["image"]) == character


def test_palette_crud(client) -> None:
    names = client.get("/api/palettes").json()["palettes"]
    assert "warm" in names

    warm = client.get("/api/palettes/warm").json()
    assert warm["name"] == "warm"
    assert "skin" in warm["palette"]

    assert client.get("/api/palettes/mine").status_code == 404

    resp = client.put("/api/palettes/mine", json={"palette": {"cloth": ["#FF0000", 255]}})
    assert resp.json() == {"ok": True, "name": "mine"}
    assert client.get("/api/palettes/mine").json()["palette"] == {"cloth": [0xFF0000, 0x0000FF]}

    assert client.delete("/api/palettes/mine").json() == {"ok": True}
    assert client.delete("/api/palettes/mine").status_code == 404


def test_palette_rejects_bad_colour(client) -> None:
    resp = client.put("/api/palettes/bad", json={"palette": {"cloth": ["#ZZZZZZ"]}})
    assert resp.status_code == 400
    assert client.get("/api/palettes/bad").status_code == 404


def test_generate_with_registered_palette(client) -> None:
    client.put("/api/palettes/green", json={"palette": {"cloth": [0x00AA00], "skin": [0x00CC00]}})
    custom = client.post("/api/generate", json={"descriptor": {"palette_name": "green"}, "seed": 1}).json()
    plain = client.post("/api/generate", json={"seed": 1}).json()
    assert custom["image"] != plain["image"]


def test_transparent_image_analysis(client) -> None:
    resp = client.post("/api/analyze", json={"image": encode_base64(PixelBuffer(8, 8))})
    assert resp.status_code == 200
    assert resp.json()["palette"] == {}
