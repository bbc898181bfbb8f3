from datetime import date

from src.school_attendance.school_attendance.compliance.scheduler import JOB_ID


def test_today_summary(admin_client):
    body = admin_client.get("/api/admin/attendance/today-summary").get_json()

    assert body["total"] == 3
    assert body["leave"] == 1
    assert body["notMarked"] == 2
    assert sorted(t["name"] for t in body["absentTeachers"]) == ["Asha", "Meena"]


def test_admin_mark_and_delete(admin_client, container):
    resp = admin_client.post(
        "/api/admin/attendance/mark", json={"teacherId": 3, "date": "2025-01-10", "status": "Half-Day"}
    )

    assert resp.status_code == 200
    record = resp.get_json()["attendance"]
    assert record["markedBy"] == "admin"
    assert record["checkInTime"] == "09:00:00"

    history = admin_client.get("/api/admin/attendance/teacher/3").get_json()
    assert [r["date"] for r in history["attendance"]] == ["2025-01-10"]

    assert admin_client.delete(f"/api/admin/attendance/{record['id']}").status_code == 200
    assert admin_client.delete(f"/api/admin/attendance/{record['id']}").status_code == 404


def test_today_summary_ignores_admin_self_mark(admin_client):
    resp = admin_client.post("/api/teacher-attendance/mark", json={"status": "Leave"})
    assert resp.status_code == 201

    body = admin_client.get("/api/admin/attendance/today-summary").get_json()

    assert body["total"] == 3
    assert body["leave"] == 1
    assert body["notMarked"] == 2
    assert body["present"] + body["absent"] + body["halfDay"] + body["leave"] + body["notMarked"] == body["total"]
    assert {r["teacherId"] for r in body["attendance"]} == {2}


def test_list_all_attendance(admin_client):
    admin_client.post("/api/admin/attendance/mark", json={"teacherId": 3, "date": "2025-01-10", "status": "Absent"})

    today = admin_client.get("/api/admin/attendance/all").get_json()
    assert today["start"] == today["end"] == "2025-01-15"
    assert [(r["teacherId"], r["teacherName"]) for r in today["attendance"]] == [(2, "Ravi")]

    by_date = admin_client.get("/api/admin/attendance/all?date=2025-01-10").get_json()
    assert [r["status"] for r in by_date["attendance"]] == ["Absent"]
    assert by_date["attendance"][0]["employeeId"] == "EMP003"

    ranged = admin_client.get("/api/admin/attendance/all?start=2025-01-01&end=2025-01-31").get_json()
    assert [r["date"] for r in ranged["attendance"]] == ["2025-01-15", "2025-01-10"]


def test_list_all_attendance_rejects_bad_ranges(admin_client, teacher_client):
    assert admin_client.get("/api/admin/attendance/all?start=2025-01-31&end=2025-01-01").status_code == 400
    assert admin_client.get("/api/admin/attendance/all?start=2025-01-01").status_code == 400
    assert admin_client.get("/api/admin/attendance/all?date=15-01-2025").status_code == 400
    assert admin_client.get("/api/admin/attendance/all?start=2023-01-01&end=2025-01-01").status_code == 400
    assert teacher_client.get("/api/admin/attendance/all").status_code == 403


def test_admin_update_attendance(admin_client, container):
    record_id = container.attendance_repo.rows[(2, date(2025, 1, 15))].attendance_id

    resp = admin_client.put(f"/api/admin/attendance/{record_id}", json={"status": "Present", "remarks": "Was on duty"})

    assert resp.status_code == 200
    updated = resp.get_json()["attendance"]
    assert updated["status"] == "Present"
    assert updated["remarks"] == "Was on duty"
    assert container.attendance_repo.rows[(2, date(2025, 1, 15))].status.value == "Present"

    kept = admin_client.put(f"/api/admin/attendance/{record_id}", json={"status": "Half-Day"}).get_json()["attendance"]
    assert kept["remarks"] == "Was on duty"

    assert admin_client.put(f"/api/admin/attendance/{record_id}", json={}).status_code == 400
    assert admin_client.put(f"/api/admin/attendance/{record_id}", json={"status": "Gone"}).status_code == 400
    assert admin_client.put("/api/admin/attendance/999", json={"status": "Present"}).status_code == 404


def test_admin_mark_validation(admin_client):
    assert admin_client.post("/api/admin/attendance/mark", json={"date": "2025-01-10"}).status_code == 400
    assert admin_client.post("/api/admin/attendance/mark", json={"teacherId": 3, "date": "10/01/2025"}).status_code == 400
    assert admin_client.post("/api/admin/attendance/mark", json={"teacherId": 77, "date": "2025-01-10"}).status_code == 404
    assert admin_client.get("/api/admin/attendance/teacher/77").status_code == 404


def test_settings_update_reschedules_sweep(admin_client, container):
    assert admin_client.get("/api/admin/attendance-settings").get_json()["settings"]["deadlineTime"] == "18:00"

    resp = admin_client.put("/api/admin/attendance-settings", json={"deadlineTime": "19:30", "notifyTeachers": False})

    assert resp.status_code == 200
    assert resp.get_json()["settings"]["deadlineTime"] == "19:30"
    trigger = str(container.sweep_scheduler._scheduler.get_job(JOB_ID).trigger)
    assert "hour='19'" in trigger and "minute='35'" in trigger


def test_settings_rejects_bad_input(admin_client):
    assert admin_client.put("/api/admin/attendance-settings", json={"deadlineTime": "7pm"}).status_code == 400
    assert admin_client.put("/api/admin/attendance-settings", json={"colour": "red"}).status_code == 400


def test_manual_sweep_and_status(admin_client, container):
    before = admin_client.post("/api/admin/attendance/auto-mark").get_json()["result"]
    assert before["outcome"] == "BEFORE_DEADLINE"

    result = admin_client.post("/api/admin/attendance/auto-mark?force=true").get_json()["result"]

    assert result["outcome"] == "COMPLETED"
    assert result["markedCount"] == 2
    assert result["alreadyMarkedCount"] == 1
    assert result["notifiedCount"] == 2

    status = admin_client.get("/api/admin/attendance/auto-mark/status").get_json()["status"]
    assert status["lastOutcome"] == "COMPLETED"
    assert status["isRunning"] is False


def test_manual_sweep_reports_storage_failure(admin_client, container, monkeypatch):
    def unreachable():
        raise RuntimeError("db down")

    monkeypatch.setattr(container.teachers, "list_active", unreachable)

    resp = admin_client.post("/api/admin/attendance/auto-mark?force=true")

    assert resp.status_code == 500
    body = resp.get_json()
    assert body["success"] is False
    assert body["result"]["outcome"] == "FAILED"
    status = admin_client.get("/api/admin/attendance/auto-mark/status").get_json()["status"]
    assert status["lastOutcome"] == "FAILED"
    assert status["lastRun"] is not None


def test_holiday_crud(admin_client):
    created = admin_client.post("/api/admin/holidays", json={"date": "2025-03-14", "name": "Holi"})
    assert created.status_code == 201
    holiday_id = created.get_json()["holiday"]["id"]

    assert admin_client.post("/api/admin/holidays", json={"date": "2025-03-14", "name": "Again"}).status_code == 400
    assert admin_client.get(f"/api/admin/holidays/{holiday_id}").get_json()["holiday"]["name"] == "Holi"

    updated = admin_client.put(f"/api/admin/holidays/{holiday_id}", json={"name": "Holi Festival"})
    assert updated.get_json()["holiday"]["name"] == "Holi Festival"

    upcoming = admin_client.get("/api/admin/holidays/upcoming").get_json()["holidays"]
    assert [h["date"] for h in upcoming] == ["2025-03-14"]

    assert admin_client.delete(f"/api/admin/holidays/{holiday_id}").status_code == 200
    assert admin_client.get(f"/api/admin/holidays/{holiday_id}").status_code == 404


def test_holiday_check(admin_client):
    republic = admin_client.post("/api/admin/holidays/check", json={"date": "2025-01-26"}).get_json()
    assert republic["isHoliday"] is True
    assert republic["holiday"]["name"] == "Republic Day"

    today = admin_client.post("/api/admin/holidays/check", json={}).get_json()
    assert today["isHoliday"] is False


def test_performance_routes(admin_client):
    listing = admin_client.get("/api/admin/teacher-performance").get_json()
    assert listing["count"] == 3
    assert listing["teachers"][0]["teacherName"] == "Asha"

    board = admin_client.get("/api/admin/teacher-performance/leaderboard?limit=1").get_json()["leaderboard"]
    assert [(e["rank"], e["teacherName"]) for e in board] == [(1, "Asha")]

    assert admin_client.get("/api/admin/teacher-performance/1").get_json()["performance"]["teacherId"] == 1
    assert admin_client.get("/api/admin/teacher-performance/9").status_code == 404
