from datetime import date

from showdesk.utils.season import current_season

ADMIN = "/api/v1/admin"


def create_show(client, headers, **fields):
    payload = {"season": "25/26", "title": "Cats"}
    payload.update(fields)
    response = client.post(f"{ADMIN}/shows/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


# Dashboard

def test_dashboard_aggregates_season(client, auth_headers):
    create_show(client, auth_headers, title="", genre="Dans")
    create_show(
        client, auth_headers,
        title="Half", genre="Cabaret",
        dates=["2025-11-01"], price="10", description_text="t",
        hero_image_url="http://cdn.example/half.jpg",
    )
    create_show(client, auth_headers, title="Other season", season="24/25")

    response = client.get(f"{ADMIN}/dashboard", params={"season": "25/26"}, headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["show_count"] == 2
    assert body["done_count"] == 0
    # round((0 + 50) / 2)
    assert body["progress"] == 25
    assert body["by_status"] == {"todo": 1, "in-progress": 1, "done": 0}
    assert [b["status"] for b in body["buckets"]] == ["todo", "in-progress", "done"]
    assert [b["label"] for b in body["buckets"]] == ["To-do", "Bezig", "Afgerond"]
    in_progress = body["buckets"][1]["shows"]
    assert in_progress[0]["title"] == "Half"
    assert in_progress[0]["first_date"] == "2025-11-01"
    assert in_progress[0]["progress"] == 50
    assert body["genres"] == [{"genre": "Cabaret", "count": 1}, {"genre": "Dans", "count": 1}]


def test_dashboard_for_empty_season(client, auth_headers):
    body = client.get(f"{ADMIN}/dashboard", params={"season": "30/31"}, headers=auth_headers).json()
    assert body["show_count"] == 0
    assert body["progress"] == 0
    assert body["genres"] == []


def test_seasons_uses_default_setting(client, auth_headers):
    body = client.get(f"{ADMIN}/seasons", headers=auth_headers).json()
    assert body["current"] == current_season(date.today())
    assert body["default"] == body["current"]

    client.put(f"{ADMIN}/settings/default_season", json={"value": "27/28"}, headers=auth_headers)
    body = client.get(f"{ADMIN}/seasons", headers=auth_headers).json()
    assert body["default"] == "27/28"


# Settings

def test_settings_defaults_and_overrides(client, auth_headers):
    body = client.get(f"{ADMIN}/settings/", headers=auth_headers).json()
    assert body["ai_max_words"] == 150
    assert "Cabaret" in body["genres"]

    response = client.put(f"{ADMIN}/settings/ai_max_words", json={"value": 200}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"key": "ai_max_words", "value": 200}

    body = client.get(f"{ADMIN}/settings/", headers=auth_headers).json()
    assert body["ai_max_words"] == 200


def test_known_settings_are_type_checked(client, auth_headers):
    bad = [
        ("ai_max_words", "veel"),
        ("ai_max_words", 0),
        ("genres", "Cabaret"),
        ("default_season", "2025"),
        ("default_start_time", "8 uur"),
    ]
    for key, value in bad:
        response = client.put(f"{ADMIN}/settings/{key}", json={"value": value}, headers=auth_headers)
        assert response.status_code == 400, (key, value)


def test_genres_are_trimmed_and_deduplicated(client, auth_headers):
    response = client.put(
        f"{ADMIN}/settings/genres",
        json={"value": [" Opera ", "Opera", "", "Dans"]},
        headers=auth_headers,
    )
    assert response.json()["value"] == ["Opera", "Dans"]


def test_unknown_settings_accept_plain_values(client, auth_headers):
    response = client.put(f"{ADMIN}/settings/show_tips", json={"value": True}, headers=auth_headers)
    assert response.status_code == 200
    response = client.put(f"{ADMIN}/settings/show_tips", json={"value": {"nested": 1}}, headers=auth_headers)
    assert response.status_code == 400


# Sort orders

def test_sort_order_round_trip_and_merge(client, auth_headers):
    url = f"{ADMIN}/sort-orders/website-sections"
    assert client.get(url, headers=auth_headers).json() == {"context": "website-sections", "ids": []}

    client.put(url, json={"ids": ["seo", "text", "images"]}, headers=auth_headers)
    merged = client.get(
        url,
        params={"default_ids": ["text", "images", "social"]},
        headers=auth_headers,
    ).json()
    assert merged["ids"] == ["text", "images", "social"]

    # stored through the generic settings table
    settings = client.get(f"{ADMIN}/settings/", headers=auth_headers).json()
    assert settings["sort_order_website-sections"] == ["seo", "text", "images"]


def test_sort_order_rejects_duplicates(client, auth_headers):
    response = client.put(
        f"{ADMIN}/sort-orders/fields",
        json={"ids": ["a", "a"]},
        headers=auth_headers,
    )
    assert response.status_code == 422


def test_sort_order_move(client, auth_headers):
    url = f"{ADMIN}/sort-orders/fields"
    client.put(url, json={"ids": ["a", "b", "c"]}, headers=auth_headers)
    response = client.post(f"{url}/move", json={"old_index": 2, "new_index": 0}, headers=auth_headers)
    assert response.json()["ids"] == ["c", "a", "b"]

    response = client.post(f"{url}/move", json={"old_index": 5, "new_index": 0}, headers=auth_headers)
    assert response.status_code == 400
