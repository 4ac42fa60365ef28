from polyglot.core.config import settings
from tests.factories import make_language, make_tag, make_translation

LANGUAGES_URL = f"{settings.API_V1_STR}/languages/"


def test_create_and_list_language(client, auth_headers):
    response = client.post(
        LANGUAGES_URL, json={"code": "en", "name": "English"}, headers=auth_headers
    )

    assert response.status_code == 201
    created = response.json()
    assert created["code"] == "en"
    assert created["is_active"] is True
    assert "created_at" in created

    listed = client.get(LANGUAGES_URL).json()
    assert listed == [
        {"id": created["id"], "code": "en", "name": "English", "is_active": True}
    ]


def test_create_language_requires_token(client):
    response = client.post(LANGUAGES_URL, json={"code": "en", "name": "English"})

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert client.get(LANGUAGES_URL).json() == []


def test_create_language_validation_errors(client, auth_headers, session):
    make_language(session, "en")

    duplicate = client.post(
        LANGUAGES_URL, json={"code": "en", "name": "English"}, headers=auth_headers
    )
    too_long = client.post(
        LANGUAGES_URL,
        json={"code": "x" * 11, "name": "Too long"},
        headers=auth_headers,
    )
    missing = client.post(LANGUAGES_URL, json={"code": "de"}, headers=auth_headers)

    assert duplicate.status_code == 422
    assert duplicate.json()["details"]["errors"] == {
        "code": ["This language code is already in use."]
    }
    assert too_long.status_code == 422
    assert "code" in too_long.json()["details"]["errors"]
    assert missing.status_code == 422
    assert "name" in missing.json()["details"]["errors"]


def test_read_language(client, session):
    language = make_language(session, "fr")

    response = client.get(f"{LANGUAGES_URL}{language.id}")

    assert response.status_code == 200
    assert response.json()["name"] == "French"


def test_read_unknown_language(client):
    response = client.get(f"{LANGUAGES_URL}404")

    assert response.status_code == 404
    assert response.json()["error_code"] == "LANGUAGE_NOT_FOUND"


def test_update_language(client, auth_headers, session):
    make_language(session, "en")
    spanish = make_language(session, "es")

    renamed = client.put(
        f"{LANGUAGES_URL}{spanish.id}",
        json={"name": "Castellano"},
        headers=auth_headers,
    )
    clash = client.put(
        f"{LANGUAGES_URL}{spanish.id}", json={"code": "en"}, headers=auth_headers
    )
    missing = client.put(f"{LANGUAGES_URL}404", json={"name": "x"}, headers=auth_headers)

    assert renamed.status_code == 200
    assert (renamed.json()["code"], renamed.json()["name"]) == ("es", "Castellano")
    assert clash.status_code == 422
    assert missing.status_code == 404


def test_delete_language_cascades(client, auth_headers, session):
    english = make_language(session, "en")
    english_id = english.id
    translation_id = make_translation(
        session, english, tags=[make_tag(session, "web")]
    ).id

    response = client.delete(f"{LANGUAGES_URL}{english_id}", headers=auth_headers)

    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"{LANGUAGES_URL}{english_id}").status_code == 404
    assert (
        client.get(f"{settings.API_V1_STR}/translations/{translation_id}").status_code
        == 404
    )
    assert client.delete(
        f"{LANGUAGES_URL}{english_id}", headers=auth_headers
    ).status_code == 404
