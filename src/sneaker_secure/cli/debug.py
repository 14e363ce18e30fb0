"""
Debug command table.

Each debug command is a named async operation over a running application
and the current session, returning a JSON-compatible result for display.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, List

from ..services import ServiceErrorMessages, Session

if TYPE_CHECKING:
    from ..app import SneakerSecureApp

DebugAction = Callable[["SneakerSecureApp", Session], Awaitable[Any]]

UNVERIFIED_SAMPLES = ("invalid-uuid-format", "aaaa0000-0000-0000-0000-000000000000", "")


@dataclass(frozen=True)
class DebugCommand:
    name: str
    label: str
    action: DebugAction


async def _view_collection(app: "SneakerSecureApp", session: Session) -> Any:
    return [entry.to_dict() for entry in await app.service.my_collection()]


async def _view_catalog(app: "SneakerSecureApp", session: Session) -> Any:
    return [item.to_dict() for item in await app.catalog.list_all()]


async def _current_user(app: "SneakerSecureApp", session: Session) -> Any:
    return {"username": session.username, "isAdmin": session.is_admin}


async def _clear_collection(app: "SneakerSecureApp", session: Session) -> Any:
    removed = await app.collection.clear()
    return {"message": ServiceErrorMessages.COLLECTION_CLEARED, "removed": removed}


async def _verify_selftest(app: "SneakerSecureApp", session: Session) -> Any:
    cases = [(item_id, True) for item_id in sorted(app.registry.trusted_ids)]
    cases.extend((item_id, False) for item_id in UNVERIFIED_SAMPLES)

    results: List[Dict[str, Any]] = []
    for item_id, expected in cases:
        actual = app.registry.is_verified(item_id)
        results.append(
            {
                "id": item_id,
                "expected": "Verified" if expected else "Unverified",
                "actual": "Verified" if actual else "Unverified",
                "passed": actual == expected,
            }
        )

    passed = sum(1 for result in results if result["passed"])
    return {
        "results": results,
        "summary": f"{passed}/{len(results)} checks passed",
    }


DEBUG_COMMANDS: Dict[str, DebugCommand] = {
    command.name: command
    for command in (
        DebugCommand("view-collection", "View user collection", _view_collection),
        DebugCommand("view-catalog", "View all sneakers", _view_catalog),
        DebugCommand("current-user", "Current user", _current_user),
        DebugCommand("clear-collection", "Clear user collection", _clear_collection),
        DebugCommand("verify-selftest", "Verification self-test", _verify_selftest),
    )
}
