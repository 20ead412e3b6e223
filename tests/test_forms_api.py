import uuid

from conftest import API, FEEDBACK_FORM, create_form, submit

from feedback_forms.services import forms as form_service


def test_create_form_defaults(client, admin, headers):
    form = create_form(client, headers)

    assert form["status"] == "open"
    assert form["response_count"] == 0
    assert form["owner_id"] == admin["id"]
    assert form["public_token"]
    assert form["questions"][0]["options"] == ["Yes", "No"]
    assert form["questions"][1]["options"] is None


def test_create_form_rejects_invalid_draft(client, headers):
    resp = client.post(f"{API}/forms", json={"title": " ", "questions": []}, headers=headers)

    assert resp.status_code == 400
    body = resp.json()
    assert body["kind"] == "validation-error"
    assert [e["code"] for e in body["errors"]] == ["empty-title", "no-questions"]


def test_question_texts_must_be_unique(client, headers):
    payload = {"title": "T", "questions": [
        {"text": "Q", "type": "short-text"},
        {"text": "Q", "type": "rating-1-5", "required": True},
    ]}
    resp = client.post(f"{API}/forms", json=payload, headers=headers)

    assert resp.status_code == 400
    assert resp.json()["errors"] == [{
        "code": "duplicate-question-text",
        "field": "questions[1].text",
        "message": 'Question 2 repeats the text "Q"',
    }]


def test_unknown_question_type_is_reported(client, headers):
    payload = {"title": "T", "questions": [{"text": "Q", "type": "slider"}]}
    resp = client.post(f"{API}/forms", json=payload, headers=headers)

    assert resp.status_code == 400
    assert resp.json()["errors"][0]["code"] == "unknown-question-type"


def test_list_forms_newest_first_and_scoped_to_owner(client, headers, other_headers):
    first = create_form(client, headers, {**FEEDBACK_FORM, "title": "First"})
    second = create_form(client, headers, {**FEEDBACK_FORM, "title": "Second"})
    create_form(client, other_headers, {**FEEDBACK_FORM, "title": "Not mine"})

    resp = client.get(f"{API}/forms", headers=headers)
    assert [f["id"] for f in resp.json()] == [second["id"], first["id"]]


def test_public_tokens_are_unique(client, headers):
    tokens = {create_form(client, headers)["public_token"] for _ in range(10)}
    assert len(tokens) == 10


def test_public_token_collision_is_regenerated(client, headers, monkeypatch):
    taken = create_form(client, headers)["public_token"]
    candidates = iter([taken, taken, "fresh-token"])
    monkeypatch.setattr(form_service, "generate_public_token", lambda: next(candidates))

    form = create_form(client, headers)
    assert form["public_token"] == "fresh-token"


def test_get_form_not_found_vs_forbidden(client, headers, other_headers):
    form = create_form(client, headers)

    assert client.get(f"{API}/forms/{form['id']}", headers=headers).status_code == 200

    missing = client.get(f"{API}/forms/{uuid.uuid4()}", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["kind"] == "not-found"

    foreign = client.get(f"{API}/forms/{form['id']}", headers=other_headers)
    assert foreign.status_code == 403
    assert foreign.json()["reason"] == "not-owner"


def test_update_content_before_any_response(client, headers):
    form = create_form(client, headers)
    patch = {
        "title": "Renamed",
        "questions": [{"text": "Pick one", "type": "dropdown", "options": []}],
    }

    resp = client.put(f"{API}/forms/{form['id']}", json=patch, headers=headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Renamed"
    assert body["description"] == FEEDBACK_FORM["description"]
    assert body["questions"] == [{"text": "Pick one", "type": "dropdown", "options": ["Option 1"], "required": False}]
    assert body["public_token"] == form["public_token"]


def test_update_can_clear_description(client, headers):
    form = create_form(client, headers)
    resp = client.put(f"{API}/forms/{form['id']}", json={"description": None}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["description"] is None


def test_update_revalidates_merged_draft(client, headers):
    form = create_form(client, headers)
    resp = client.put(f"{API}/forms/{form['id']}", json={"questions": []}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["code"] == "no-questions"


def test_content_locked_after_response_but_status_toggle_allowed(client, headers):
    form = create_form(client, headers)
    assert submit(client, form["public_token"], [
        {"question_text": "Would you come again?", "answer": "Yes"},
    ]).status_code == 201

    locked = client.put(f"{API}/forms/{form['id']}", json={"title": "Too late"}, headers=headers)
    assert locked.status_code == 403
    assert locked.json()["reason"] == "content-locked"

    closed = client.patch(f"{API}/forms/{form['id']}/status", json={"status": "closed"}, headers=headers)
    assert closed.status_code == 200
    assert closed.json()["status"] == "closed"
    assert closed.json()["title"] == FEEDBACK_FORM["title"]

    reopened = client.put(f"{API}/forms/{form['id']}", json={"status": "open"}, headers=headers)
    assert reopened.status_code == 200
    assert reopened.json()["status"] == "open"
    assert reopened.json()["response_count"] == 1


def test_status_change_needs_ownership(client, headers, other_headers):
    form = create_form(client, headers)
    resp = client.patch(f"{API}/forms/{form['id']}/status", json={"status": "closed"}, headers=other_headers)
    assert resp.status_code == 403


def test_invalid_status_value(client, headers):
    form = create_form(client, headers)
    resp = client.patch(f"{API}/forms/{form['id']}/status", json={"status": "archived"}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["kind"] == "validation-error"


def test_public_form_view(client, headers):
    form = create_form(client, headers)

    resp = client.get(f"{API}/forms/public/{form['public_token']}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == FEEDBACK_FORM["title"]
    assert "owner_id" not in body
    assert "response_count" not in body


def test_public_form_closed_vs_bad_link(client, headers):
    form = create_form(client, headers)
    client.patch(f"{API}/forms/{form['id']}/status", json={"status": "closed"}, headers=headers)

    closed = client.get(f"{API}/forms/public/{form['public_token']}")
    missing = client.get(f"{API}/forms/public/does-not-exist")

    assert closed.status_code == 403
    assert closed.json()["reason"] == "closed"
    assert missing.status_code == 404
    assert missing.json()["kind"] == "not-found"


def test_delete_form_cascades_to_responses(client, headers, other_headers):
    form = create_form(client, headers)
    submit(client, form["public_token"], [{"question_text": "Would you come again?", "answer": "No"}])

    assert client.delete(f"{API}/forms/{form['id']}", headers=other_headers).status_code == 403

    resp = client.delete(f"{API}/forms/{form['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    assert client.get(f"{API}/forms/{form['id']}", headers=headers).status_code == 404
    assert client.get(f"{API}/responses/{form['id']}", headers=headers).status_code == 404
    assert client.get(f"{API}/forms/public/{form['public_token']}").status_code == 404
