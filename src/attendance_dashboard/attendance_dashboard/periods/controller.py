from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..container import Container
from .catalog import configured_groups, find_period
from .model import ClassPeriod
from .scheduler import PeriodScheduler

PINNED_KEY = "pinned_hour"


def register(app: Flask, container: Container) -> None:
    def _scheduler() -> PeriodScheduler:
        pinned: Optional[ClassPeriod] = None
        if session.get(PINNED_KEY):
            pinned = find_period(container.periods, session[PINNED_KEY])
        return PeriodScheduler(container.periods, pinned=pinned, clock=now_local)

    def _remember(scheduler: PeriodScheduler) -> None:
        if scheduler.pinned is None:
            session.pop(PINNED_KEY, None)
        else:
            session[PINNED_KEY] = scheduler.pinned.hour

    @app.route("/api/groups", methods=["GET"], endpoint="list_groups")
    def list_groups():
        return jsonify({"groups": configured_groups(container.periods)})

    @app.route("/api/periods", methods=["GET"], endpoint="list_periods")
    def list_periods():
        return jsonify({"periods": [p.to_dict() for p in container.periods]})

    @app.route("/api/live", methods=["GET"], endpoint="live_status")
    def live_status():
        """One tick of the live view: schedule decision plus, in class, the absentees."""
        now = now_local()
        scheduler = _scheduler()
        decision = scheduler.evaluate(now)
        _remember(scheduler)

        payload = {**decision.to_dict(), "checkedAt": now.isoformat(timespec="seconds")}
        if decision.period is None:
            return jsonify({**payload, "attendance": None, "absentStudents": []})

        result = container.attendance_service.check_period(decision.period, day=now.date())
        by_email = {s.key: s for s in container.roster_service.students_for_hour(decision.period.hour)}
        absent = []
        for email in result.absent:
            student = by_email.get(email)
            absent.append({
                "email": email,
                "name": student.name if student else email,
                "photo": student.photo if student else None,
            })

        return jsonify({**payload, "attendance": result.to_dict(), "absentStudents": absent})

    @app.route("/api/live/pin", methods=["POST"], endpoint="pin_period")
    def pin_period():
        data = request.get_json(silent=True) or {}
        scheduler = _scheduler()
        period = scheduler.pin(data.get("hour"))
        _remember(scheduler)
        return jsonify({"success": True, "period": period.to_dict()})

    @app.route("/api/live/pin", methods=["DELETE"], endpoint="unpin_period")
    def unpin_period():
        session.pop(PINNED_KEY, None)
        return jsonify({"success": True})
