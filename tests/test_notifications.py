"""Notification endpoints."""

from clinicdesk.features.notifications.models import Notification

from conftest import auth_headers


async def _notify(doctor_id, title="Reminder", read=False, type="info"):
    notification = Notification(doctor_id=doctor_id, title=title, message="m", read=read, type=type)
    await notification.insert()
    return notification


async def test_create_notification_defaults(client, doctor_a):
    response = await client.post(
        "/api/notifications",
        json={"title": "Lab results", "message": "Ready"},
        headers=auth_headers(doctor_a),
    )

    body = response.json()
    assert response.status_code == 201
    assert body["type"] == "info"
    assert body["read"] is False
    assert body["doctor_id"] == str(doctor_a.id)


async def test_title_length_limit(client, doctor_a):
    response = await client.post(
        "/api/notifications",
        json={"title": "t" * 256, "message": "m"},
        headers=auth_headers(doctor_a),
    )

    assert response.status_code == 422


async def test_list_filters(client, doctor_a, doctor_b):
    a = str(doctor_a.id)
    await _notify(a, "one", read=True, type="alert")
    await _notify(a, "two", type="alert")
    await _notify(a, "three", type="reminder")
    await _notify(str(doctor_b.id), "theirs")
    await _notify(None, "system")
    headers = auth_headers(doctor_a)

    response = await client.get("/api/notifications", headers=headers)
    assert response.json()["total"] == 3

    response = await client.get("/api/notifications", params={"read": "false"}, headers=headers)
    assert {n["title"] for n in response.json()["data"]} == {"two", "three"}

    response = await client.get(
        "/api/notifications", params={"type": "alert", "read": "true"}, headers=headers
    )
    assert [n["title"] for n in response.json()["data"]] == ["one"]


async def test_mark_as_read_is_idempotent(client, doctor_a):
    notification = await _notify(str(doctor_a.id))
    headers = auth_headers(doctor_a)

    first = await client.patch(f"/api/notifications/{notification.id}/read", headers=headers)
    second = await client.patch(f"/api/notifications/{notification.id}/read", headers=headers)

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json()["read"] is True
    assert (await Notification.get(notification.id)).read is True


async def test_mark_all_as_read_counts_only_callers_unread(client, doctor_a, doctor_b):
    a = str(doctor_a.id)
    await _notify(a)
    await _notify(a)
    await _notify(a, read=True)
    theirs = await _notify(str(doctor_b.id))

    response = await client.patch("/api/notifications/read-all", headers=auth_headers(doctor_a))

    assert response.status_code == 200
    assert response.json() == {"count": 2}
    assert await Notification.find(Notification.doctor_id == a, Notification.read == False).count() == 0
    assert (await Notification.get(theirs.id)).read is False


async def test_foreign_notification_is_404(client, doctor_a, doctor_b):
    notification = await _notify(str(doctor_a.id))
    headers = auth_headers(doctor_b)

    assert (await client.get(f"/api/notifications/{notification.id}", headers=headers)).status_code == 404
    assert (await client.patch(f"/api/notifications/{notification.id}/read", headers=headers)).status_code == 404
    assert (await client.delete(f"/api/notifications/{notification.id}", headers=headers)).status_code == 404


async def test_delete_notification(client, doctor_a):
    notification = await _notify(str(doctor_a.id))

    response = await client.delete(f"/api/notifications/{notification.id}", headers=auth_headers(doctor_a))

    assert response.status_code == 200
    assert await Notification.get(notification.id) is None
