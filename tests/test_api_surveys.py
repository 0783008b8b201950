"""Tests for survey and response API endpoints."""
import pytest
from httpx import AsyncClient, ASGITransport


API_BASE_URL = "http://test"


@pytest.mark.asyncio
async def test_create_and_fetch_survey(test_app, user_factory, auth_headers, sample_survey_data):
    """POST /surveys/{user_id} then GET returns the nested survey."""
    user = await user_factory()
    headers = auth_headers(user)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        create_response = await client.post(f"/surveys/{user.id}", json=sample_survey_data, headers=headers)
        assert create_response.status_code == 201
        created = create_response.json()["survey"]

        response = await client.get(f"/surveys/{user.id}/{created['id']}", headers=headers)

    assert response.status_code == 200
    survey = response.json()["survey"]
    assert survey["title"] == "Test Survey"
    assert [q["type"] for q in survey["questions"]] == ["Multiple Choice", "Yes/No", "Text"]
    assert [c["text"] for c in survey["questions"][0]["options"]] == ["Red", "Blue", "Green"]


@pytest.mark.asyncio
async def test_list_surveys(test_app, user_factory, survey_factory, auth_headers):
    """GET /surveys/{user_id}/all lists the user's surveys."""
    user = await user_factory()
    created = await survey_factory(user)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        response = await client.get(f"/surveys/{user.id}/all", headers=auth_headers(user))

    assert response.status_code == 200
    assert response.json()["surveys"] == [
        {"id": created.id, "title": "Test Survey", "description": "This is a test survey."}
    ]


@pytest.mark.asyncio
async def test_survey_routes_require_matching_user(test_app, user_factory, auth_headers, sample_survey_data):
    """A token for one user cannot act on another user's surveys."""
    owner = await user_factory()
    intruder = await user_factory()

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        no_token = await client.get(f"/surveys/{owner.id}/all")
        wrong_user = await client.post(
            f"/surveys/{owner.id}", json=sample_survey_data, headers=auth_headers(intruder)
        )
        bad_token = await client.get(
            f"/surveys/{owner.id}/all", headers={"Authorization": "Bearer not-a-jwt"}
        )

    assert no_token.status_code == 401
    assert wrong_user.status_code == 401
    assert bad_token.status_code == 401
    assert bad_token.json()["detail"] == "invalid_token"


@pytest.mark.asyncio
async def test_create_survey_validation_error(test_app, user_factory, auth_headers):
    """Multiple Choice without options is rejected with 400."""
    user = await user_factory()
    payload = {
        "title": "Broken",
        "description": "No options",
        "questions": [{"text": "Pick", "type": "Multiple Choice", "options": []}],
    }

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        response = await client.post(f"/surveys/{user.id}", json=payload, headers=auth_headers(user))

    assert response.status_code == 400
    assert response.json()["detail"] == "Request validation failed"


@pytest.mark.asyncio
async def test_get_missing_survey(test_app, user_factory, auth_headers):
    user = await user_factory()

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        response = await client.get(f"/surveys/{user.id}/123456789", headers=auth_headers(user))

    assert response.status_code == 404
    assert response.json()["detail"] == "No survey found with id: 123456789"


@pytest.mark.asyncio
async def test_update_and_delete_survey(test_app, user_factory, survey_factory, auth_headers):
    """PATCH then DELETE /surveys/{user_id}/{survey_id}."""
    user = await user_factory()
    created = await survey_factory(user)
    headers = auth_headers(user)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        patch_response = await client.patch(
            f"/surveys/{user.id}/{created.id}", json={"title": "Renamed"}, headers=headers
        )
        empty_patch = await client.patch(f"/surveys/{user.id}/{created.id}", json={}, headers=headers)
        delete_response = await client.delete(f"/surveys/{user.id}/{created.id}", headers=headers)
        missing = await client.get(f"/surveys/{user.id}/{created.id}", headers=headers)

    assert patch_response.status_code == 200
    assert patch_response.json()["survey"]["title"] == "Renamed"
    assert empty_patch.status_code == 400
    assert empty_patch.json()["detail"] == "No data"
    assert delete_response.status_code == 200
    assert delete_response.json() == {"deleted_survey": created.id}
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_complete_survey_and_report(test_app, user_factory, survey_factory):
    """Anonymous completion feeds the summary, chart and response endpoints."""
    user = await user_factory()
    survey = await survey_factory(user)
    answers = {str(q.id): answer for q, answer in zip(survey.questions, ["Red", "Yes", "Great"])}

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        complete_response = await client.post(
            "/surveys/complete", json={"survey_id": survey.id, "responses": answers}
        )
        assert complete_response.status_code == 201
        completed = complete_response.json()["completed_survey"]

        summary = await client.get(f"/responses/summary/{survey.id}")
        chart = await client.get(f"/responses/data/{survey.id}")
        single = await client.get(f"/responses/{completed['id']}")
        deleted = await client.delete(f"/responses/{completed['id']}")
        missing = await client.get(f"/responses/{completed['id']}")

    assert [a["answer_text"] for a in completed["answers"]] == ["Red", "Yes", "Great"]

    assert summary.status_code == 200
    assert [r["id"] for r in summary.json()["responses"]] == [completed["id"]]

    assert chart.status_code == 200
    rows = chart.json()["survey_chart_data"]
    assert [row["question_type"] for row in rows] == ["Multiple Choice", "Yes/No", "Text"]
    assert {row["response_id"] for row in rows} == {completed["id"]}

    assert single.status_code == 200
    assert {a["answer_text"] for a in single.json()["response"]["answers"]} == {"Red", "Yes", "Great"}

    assert deleted.json() == {"deleted_response": completed["id"]}
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_complete_survey_rejects_bad_payload(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        missing_id = await client.post("/surveys/complete", json={"responses": {}})
        non_text = await client.post("/surveys/complete", json={"survey_id": 1, "responses": {"1": [1]}})

    assert missing_id.status_code == 400
    assert non_text.status_code == 400


@pytest.mark.asyncio
async def test_summary_and_chart_for_unanswered_survey(test_app, user_factory, survey_factory):
    user = await user_factory()
    survey = await survey_factory(user)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        summary = await client.get(f"/responses/summary/{survey.id}")
        chart = await client.get(f"/responses/data/{survey.id}")

    assert summary.status_code == 404
    assert chart.status_code == 200
    assert chart.json() == {"survey_chart_data": []}


@pytest.mark.asyncio
async def test_patch_survey_with_null_title(test_app, user_factory, survey_factory, auth_headers):
    """An explicit null is a 400 and the survey keeps its title."""
    user = await user_factory()
    created = await survey_factory(user)
    headers = auth_headers(user)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        null_patch = await client.patch(f"/surveys/{user.id}/{created.id}", json={"title": None}, headers=headers)
        response = await client.get(f"/surveys/{user.id}/{created.id}", headers=headers)

    assert null_patch.status_code == 400
    assert null_patch.json()["detail"] == "Cannot set survey fields to null: title"
    assert response.status_code == 200
    assert response.json()["survey"]["title"] == "Test Survey"


@pytest.mark.asyncio
async def test_completion_timestamp_is_utc(test_app, user_factory, survey_factory):
    user = await user_factory()
    survey = await survey_factory(user)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL) as client:
        await client.post("/surveys/complete", json={"survey_id": survey.id, "responses": {}})
        summary = await client.get(f"/responses/summary/{survey.id}")

    assert summary.json()["responses"][0]["completed_at"].endswith("Z")
