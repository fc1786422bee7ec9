#!/usr/bin/env python3
"""
Admin tools for the proctoring service
"""

import argparse
import json
import os
from typing import Optional

from dotenv import load_dotenv

dotenv_path = os.path.join(os.getcwd(), '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)

from proctor_app.core import database
from proctor_app.core.errors import ProctoringError
from proctor_app.services.proctoring_service import ProctoringService
from proctor_app.services.session_repository import ProctoringSessionRepository
from proctor_app.utils.timezone import format_local_time


def get_service(db) -> ProctoringService:
    return ProctoringService(ProctoringSessionRepository(db))


def init_db() -> int:
    database.create_db_and_tables()
    print("✅ Database tables created")
    return 0


def list_active_sessions(limit: int = 50) -> int:
    db = database.SessionLocal()
    try:
        sessions = ProctoringSessionRepository(db).list_active_sessions(limit)
        if not sessions:
            print("📋 No active proctoring sessions")
            return 0

        print(f"📋 Active sessions: {len(sessions)}")
        print("=" * 80)
        for session in sessions:
            lock = f"LOCKED ({session.lock_reason})" if session.is_locked else "unlocked"
            print(f"ID: {session.id} | {lock}")
            print(f"   User: {session.user_id} | Quiz: {session.quiz_id}")
            print(f"   Started: {format_local_time(session.start_time)}")
            print(f"   Score: {session.suspicion_score} | Violations: {session.violation_count}")
            print("-" * 80)
        return 0
    except ProctoringError as e:
        print(f"❌ Error listing sessions: {e}")
        return 1
    finally:
        db.close()


def show_report(session_id: str, as_json: bool = False) -> int:
    db = database.SessionLocal()
    try:
        report = get_service(db).get_report(session_id)
    except ProctoringError as e:
        print(f"❌ {e}")
        return 1
    finally:
        db.close()

    if as_json:
        print(json.dumps(report.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))
        return 0

    summary = report.session
    print(f"📊 Proctoring report for session {summary.id}")
    print("=" * 80)
    print(f"   User: {summary.user_id} | Quiz: {summary.quiz_id}")
    print(f"   Status: {summary.status}")
    print(f"   Started: {report.started_at_display} | Ended: {report.ended_at_display or '-'}")
    if report.duration is not None:
        print(f"   Duration: {report.duration:.1f} min")
    print(f"   Suspicion score: {summary.suspicion_score} ({report.risk_level})")
    if summary.is_locked:
        print(f"   Locked: {summary.lock_reason}")
    print("Violations by type:")
    for violation_type, count in report.violation_counts.items():
        if count:
            print(f"   {violation_type}: {count}")
    print(f"Recommendation: {report.recommendation}")
    return 0


def sweep_stale_sessions(max_age_minutes: Optional[int] = None) -> int:
    db = database.SessionLocal()
    try:
        terminated = get_service(db).terminate_stale_sessions(max_age_minutes)
    except ProctoringError as e:
        print(f"❌ Sweep failed: {e}")
        return 1
    finally:
        db.close()

    print(f"🧹 Terminated {len(terminated)} stale sessions")
    for session_id in terminated:
        print(f"   {session_id}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Admin tools for the proctoring service")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    subparsers.add_parser('init-db', help='Create database tables')

    active_parser = subparsers.add_parser('active', help='List sessions that have not ended')
    active_parser.add_argument('--limit', type=int, default=50)

    report_parser = subparsers.add_parser('report', help='Show the report of one session')
    report_parser.add_argument('--session-id', required=True)
    report_parser.add_argument('--json', action='store_true', help='Print raw JSON')

    sweep_parser = subparsers.add_parser('sweep', help='Terminate abandoned active sessions')
    sweep_parser.add_argument('--max-age-minutes', type=int, help='Defaults to STALE_SESSION_MINUTES')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == 'init-db':
        return init_db()
    elif args.command == 'active':
        return list_active_sessions(args.limit)
    elif args.command == 'report':
        return show_report(args.session_id, args.json)
    elif args.command == 'sweep':
        return sweep_stale_sessions(args.max_age_minutes)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
