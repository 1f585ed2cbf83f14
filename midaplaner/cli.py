#!/usr/bin/env python3
"""
MiDaPlaner command line.

    midaplaner serve [--host H] [--port P] [--config midaplaner.yaml]
    midaplaner verify
"""
import argparse
import logging
import sys
from typing import List, Optional

from .api import PlannerAPI
from .config import Config
from .errors import AuthenticationFailure
from .schema import Role, Status
from .summary import boards_summary

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [midaplaner] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


# ── serve ────────────────────────────────────────────────────────────────────

def cmd_serve(args) -> int:
    from .server import create_app

    cfg = Config.load(args.config)
    if args.host:
        cfg.host = args.host
    if args.port:
        cfg.port = args.port
    setup_logging(cfg.log_level)

    app = create_app(config=cfg)
    api = app.config["PLANNER_API"]
    logger.info(f"Loaded {len(api.auth)} users, binding {cfg.host}:{cfg.port}")

    print(f"""
╔═══════════════════════════════════════╗
║  MiDaPlaner Server                    ║
╠═══════════════════════════════════════╣
║  URL:   http://{cfg.host}:{cfg.port:<19}║
║  Users: {len(api.auth):<30}║
╚═══════════════════════════════════════╝
""")

    # one in-memory model, so requests are handled one at a time
    app.run(host=cfg.host, port=cfg.port, debug=False, threaded=False)
    return 0


# ── verify ───────────────────────────────────────────────────────────────────

class _Checker:
    def __init__(self):
        self.failures = 0

    def check(self, label: str, ok: bool) -> bool:
        print(f"   {'✅' if ok else '❌'} {label}")
        if not ok:
            self.failures += 1
        return ok


def run_verify(api: Optional[PlannerAPI] = None) -> int:
    """
    Walk the register/login and board/column/task flows end to end.

    Returns 0 when every check passed, 1 otherwise.
    """
    api = api or PlannerAPI()
    c = _Checker()

    print("=" * 60)
    print("MiDaPlaner Verification")
    print("=" * 60)

    print("\n[1/4] Registration...")
    c.check("register manager/123 as MANAGER", api.register("manager", "123", Role.MANAGER))
    c.check("duplicate register rejected", not api.register("manager", "x", Role.EMPLOYEE))

    print("\n[2/4] Login...")
    session = None
    try:
        session = api.login("manager", "123")
        user = api.session_user(session)
        c.check(f"login returns {user.username} ({user.role.name})",
                user.role == Role.MANAGER and user.password == "123")
    except AuthenticationFailure:
        c.check("login with original password", False)
    try:
        api.login("manager", "wrong")
        c.check("wrong password rejected", False)
    except AuthenticationFailure:
        c.check("wrong password rejected", True)

    if session is None:
        print("\n❌ Cannot continue without a session")
        return 1

    print("\n[3/4] Board → column → task...")
    board_id = api.create_board(session, "Sprint1")
    column_id = api.create_column(board_id, "To Do")
    task_id = api.create_task(column_id, "Write spec")
    _, title, status, progress = api.list_tasks(column_id)[0]
    c.check(f"{title}: status {status.name}, progress {progress}%",
            status == Status.TO_DO and progress == 0)
    api.set_task_status(task_id, Status.DONE)
    _, _, status, progress = api.list_tasks(column_id)[0]
    c.check(f"after DONE: progress {progress}%", status == Status.DONE and progress == 100)

    print("\n[4/4] Milestones...")
    other_id = api.create_task(column_id, "Review spec")
    for name in ("outline", "draft", "final"):
        api.add_milestone(other_id, name)
    api.toggle_milestone(other_id, 0)
    progress = api.get_task(other_id)["progress"]
    c.check(f"1 of 3 milestones: progress {progress}%", progress == 33)
    api.toggle_milestone(other_id, 1)
    progress = api.get_task(other_id)["progress"]
    c.check(f"2 of 3 milestones: progress {progress}%", progress == 66)

    print()
    print(boards_summary(api.controller.boards()))
    print("\n" + "=" * 60)
    if c.failures:
        print(f"❌ {c.failures} CHECK(S) FAILED")
        return 1
    print("✅ ALL CHECKS PASSED")
    return 0


def cmd_verify(_args) -> int:
    return run_verify()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="midaplaner", description="MiDaPlaner task boards")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the JSON API server")
    serve.add_argument("--host", help="Bind address (overrides config)")
    serve.add_argument("--port", type=int, help="Port (overrides config)")
    serve.add_argument("--config", help="Path to midaplaner.yaml")
    serve.set_defaults(func=cmd_serve)

    verify = sub.add_parser("verify", help="Run the end-to-end verification walk-through")
    verify.set_defaults(func=cmd_verify)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
