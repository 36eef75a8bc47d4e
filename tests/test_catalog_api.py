from portal.catalog.cursor import extract_page

from .factories import BASE_URL, character_payload, episode_payload, list_payload, location_payload


def test_health_check(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_api_root_returns_endpoint_map(client, upstream):
    upstream.add(
        BASE_URL,
        {
            "characters": f"{BASE_URL}/character",
            "locations": f"{BASE_URL}/location",
            "episodes": f"{BASE_URL}/episode",
        },
    )

    response = client.get("/api/catalog/")

    assert response.status_code == 200
    assert response.json()["episodes"] == f"{BASE_URL}/episode"


def test_api_root_unavailable_is_bad_gateway(client, upstream):
    upstream.add(BASE_URL, status=503, body=b"")

    response = client.get("/api/catalog/")

    assert response.status_code == 502


def test_filtered_character_page_end_to_end(client, upstream):
    next_url = f"{BASE_URL}/character?page=3&status=alive"
    upstream.add(
        f"{BASE_URL}/character?page=2&status=alive",
        list_payload(
            [character_payload(i) for i in range(21, 41)],
            count=439,
            pages=22,
            next_url=next_url,
            prev_url=f"{BASE_URL}/character?page=1&status=alive",
        ),
    )

    response = client.get("/api/catalog/characters", params={"status": "alive", "page": "2"})

    assert response.status_code == 200
    data = response.json()
    assert data["page"] == 2
    assert len(data["items"]) == 20
    assert data["items"][0]["id"] == 21
    assert data["page_info"]["next"] == next_url
    assert extract_page(data["page_info"]["next"]) == 3
    assert data["next_page"] == 3
    assert data["prev_page"] == 1
    assert data["filters"] == {"name": "", "status": "alive", "species": "", "type": "", "gender": ""}
    assert upstream.urls() == [f"{BASE_URL}/character?page=2&status=alive"]


def test_no_matches_render_empty_page_with_disabled_controls(client, upstream):
    response = client.get("/api/catalog/characters", params={"name": "nobody at all"})

    assert response.status_code == 200
    data = response.json()
    assert data["items"] == []
    assert data["page_info"] == {"count": 0, "pages": 0, "next": None, "prev": None}
    assert data["next_page"] is None
    assert data["prev_page"] is None
    assert upstream.urls() == [f"{BASE_URL}/character?page=1&name=nobody+at+all"]


def test_invalid_page_falls_back_to_first_page(client, upstream):
    upstream.add(f"{BASE_URL}/episode?page=1", list_payload([episode_payload(1)]))

    response = client.get("/api/catalog/episodes", params={"page": "minus-one"})

    assert response.status_code == 200
    assert response.json()["page"] == 1
    assert len(response.json()["items"]) == 1


def test_malformed_cursor_disables_that_direction(client, upstream):
    upstream.add(
        f"{BASE_URL}/location?page=1&type=Planet",
        list_payload([location_payload(1)], next_url=f"{BASE_URL}/location?foo=bar"),
    )

    response = client.get("/api/catalog/locations", params={"type": "Planet"})

    assert response.status_code == 200
    assert response.json()["next_page"] is None


def test_character_detail_resolves_origin_and_location(client, upstream):
    upstream.add(
        f"{BASE_URL}/character/1",
        character_payload(
            1,
            name="Rick Sanchez",
            origin={"name": "unknown", "url": ""},
            location={"name": "Citadel of Ricks", "url": f"{BASE_URL}/location/3"},
        ),
    )
    upstream.add(f"{BASE_URL}/location/3", location_payload(3, name="Citadel of Ricks"))

    response = client.get("/api/catalog/characters/1")

    assert response.status_code == 200
    data = response.json()
    assert data["character"]["name"] == "Rick Sanchez"
    assert data["origin"]["error"] == "NoRelation"
    assert data["origin"]["entity"] is None
    assert data["location"]["error"] is None
    assert data["location"]["entity"]["name"] == "Citadel of Ricks"


def test_character_detail_not_found(client, upstream):
    assert client.get("/api/catalog/characters/99999").status_code == 404
    assert client.get("/api/catalog/characters/rick").status_code == 404


def test_episode_detail_keeps_failed_characters_in_place(client, upstream):
    refs = [f"{BASE_URL}/character/{i}" for i in (1, 2, 3)]
    upstream.add(f"{BASE_URL}/episode/1", episode_payload(1, name="Pilot", characters=refs))
    upstream.add(refs[0], character_payload(1))
    upstream.add(refs[1], status=500, body=b"")
    upstream.add(refs[2], character_payload(3))

    response = client.get("/api/catalog/episodes/1")

    assert response.status_code == 200
    data = response.json()
    assert data["episode"]["name"] == "Pilot"
    characters = data["characters"]
    assert [c["error"] for c in characters] == [None, "ResolutionFailed", None]
    assert characters[0]["entity"]["id"] == 1
    assert characters[1]["ref"] == refs[1]
    assert characters[2]["entity"]["id"] == 3


def test_episode_detail_not_found(client, upstream):
    upstream.add(f"{BASE_URL}/episode/77", {"error": "Episode not found"}, status=404)

    assert client.get("/api/catalog/episodes/77").status_code == 404


def test_location_detail_resolves_residents(client, upstream):
    refs = [f"{BASE_URL}/character/38", f"{BASE_URL}/character/45"]
    upstream.add(f"{BASE_URL}/location/1", location_payload(1, name="Earth (C-137)", residents=refs))
    upstream.add(refs[0], character_payload(38, name="Beth Smith"))
    upstream.add(refs[1], character_payload(45, name="Bill"))

    response = client.get("/api/catalog/locations/1")

    assert response.status_code == 200
    residents = response.json()["residents"]
    assert [r["entity"]["name"] for r in residents] == ["Beth Smith", "Bill"]


def test_location_without_residents_makes_single_request(client, upstream):
    upstream.add(f"{BASE_URL}/location/20", location_payload(20, residents=[]))

    response = client.get("/api/catalog/locations/20")

    assert response.status_code == 200
    assert response.json()["residents"] == []
    assert upstream.urls() == [f"{BASE_URL}/location/20"]
