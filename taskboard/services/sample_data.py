"""Sample boards seeded on first run"""

from ..models.board import BoardState, Priority
from . import boards, tasks, users


def sample_state() -> BoardState:
    """Two boards with a few tasks spread over the default columns"""
    state = BoardState()

    state, roadmap = boards.add_board(state, "Product Roadmap", board_id="board-roadmap")
    todo, progress, done = (c.id for c in roadmap.columns)
    state, _ = users.add_user(state, roadmap.id, "owner@example.com")
    state, _ = users.add_user(state, roadmap.id, "designer@example.com")

    state, _ = tasks.add_task(state, roadmap.id, {
        "title": "Collect feedback from beta users",
        "description": "Summarize the survey answers and open issues.",
        "status": todo,
        "priority": Priority.HIGH,
        "assigned_users": ["owner@example.com"],
    })
    state, _ = tasks.add_task(state, roadmap.id, {
        "title": "Draft onboarding flow",
        "status": todo,
        "priority": Priority.MEDIUM,
        "subtasks": [
            {"title": "Welcome screen"},
            {"title": "Sample board tour"},
        ],
        "assigned_users": ["designer@example.com"],
    })
    state, _ = tasks.add_task(state, roadmap.id, {
        "title": "Dark mode",
        "status": progress,
        "priority": Priority.LOW,
        "subtasks": [{"title": "Color tokens", "completed": True}],
    })
    state, _ = tasks.add_task(state, roadmap.id, {
        "title": "Set up project board",
        "status": done,
        "priority": Priority.LOWEST,
    })

    state, personal = boards.add_board(state, "Personal", board_id="board-personal")
    state, _ = tasks.add_task(state, personal.id, {
        "title": "Renew passport",
        "priority": Priority.HIGHEST,
    })

    return state.model_copy(update={"current_board": roadmap.id})
