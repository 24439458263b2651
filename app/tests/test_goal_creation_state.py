"""
Tests for the in-memory goal creation wizard.
"""
import threading
from decimal import Decimal

from app.services.goal_creation_state import GoalCreationStateStore, GoalCreationStep

ADMIN_ID = 42
CHAT_ID = 4200


def test_full_sequence(state_store: GoalCreationStateStore):
    """Test the wizard walks title -> description -> amount and then stops."""
    state_store.start_goal_creation(ADMIN_ID, CHAT_ID)
    assert state_store.is_user_creating_goal(ADMIN_ID)
    assert state_store.get_state(ADMIN_ID).step == GoalCreationStep.WAITING_FOR_TITLE

    state_store.set_title(ADMIN_ID, "T")
    assert state_store.get_state(ADMIN_ID).step == GoalCreationStep.WAITING_FOR_DESCRIPTION

    state_store.set_description(ADMIN_ID, "D")
    assert state_store.get_state(ADMIN_ID).step == GoalCreationStep.WAITING_FOR_AMOUNT
    assert state_store.is_user_creating_goal(ADMIN_ID)

    state_store.set_amount(ADMIN_ID, Decimal("100"))
    state = state_store.get_state(ADMIN_ID)

    assert state.step == GoalCreationStep.NONE
    assert state.chat_id == CHAT_ID
    assert state.title == "T"
    assert state.description == "D"
    assert state.target_amount == Decimal("100")
    assert state.is_complete
    assert not state_store.is_user_creating_goal(ADMIN_ID)


def test_cancel_removes_state(state_store: GoalCreationStateStore):
    state_store.start_goal_creation(ADMIN_ID, CHAT_ID)
    state_store.set_title(ADMIN_ID, "T")

    state_store.cancel_goal_creation(ADMIN_ID)
    state_store.cancel_goal_creation(ADMIN_ID)

    assert state_store.get_state(ADMIN_ID) is None
    assert not state_store.is_user_creating_goal(ADMIN_ID)
    assert state_store.active_state_count == 0


def test_set_without_start_is_noop(state_store: GoalCreationStateStore):
    """Test out-of-sequence calls do not create a state."""
    state_store.set_title(ADMIN_ID, "T")
    state_store.set_description(ADMIN_ID, "D")
    state_store.set_amount(ADMIN_ID, Decimal("1"))

    assert state_store.get_state(ADMIN_ID) is None


def test_restart_overwrites_previous_wizard(state_store: GoalCreationStateStore):
    state_store.start_goal_creation(ADMIN_ID, CHAT_ID)
    state_store.set_title(ADMIN_ID, "Old")

    state_store.start_goal_creation(ADMIN_ID, CHAT_ID + 1)
    state = state_store.get_state(ADMIN_ID)

    assert state.title is None
    assert state.chat_id == CHAT_ID + 1
    assert state.step == GoalCreationStep.WAITING_FOR_TITLE


def test_get_state_returns_copy(state_store: GoalCreationStateStore):
    state_store.start_goal_creation(ADMIN_ID, CHAT_ID)

    state = state_store.get_state(ADMIN_ID)
    state.title = "changed outside"

    assert state_store.get_state(ADMIN_ID).title is None
    assert state_store.reads == 2


def test_admins_are_independent(state_store: GoalCreationStateStore):
    state_store.start_goal_creation(1, 10)
    state_store.start_goal_creation(2, 20)
    state_store.set_title(1, "first")

    assert state_store.get_state(2).title is None
    assert state_store.get_state(2).step == GoalCreationStep.WAITING_FOR_TITLE
    assert state_store.active_state_count == 2


def test_concurrent_wizards():
    """Test many admins running the wizard at the same time."""
    store = GoalCreationStateStore()
    admins = range(50)
    barrier = threading.Barrier(len(admins))

    def run(admin_id: int):
        barrier.wait()
        store.start_goal_creation(admin_id, admin_id * 10)
        store.set_title(admin_id, f"title-{admin_id}")
        store.set_description(admin_id, f"description-{admin_id}")
        store.set_amount(admin_id, Decimal(admin_id + 1))

    threads = [threading.Thread(target=run, args=(admin_id,)) for admin_id in admins]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    for admin_id in admins:
        state = store.get_state(admin_id)
        assert state.title == f"title-{admin_id}"
        assert state.description == f"description-{admin_id}"
        assert state.target_amount == Decimal(admin_id + 1)
        assert state.step == GoalCreationStep.NONE


def test_concurrent_titles_for_same_admin():
    """Test racing SetTitle calls leave one consistent title and one step."""
    store = GoalCreationStateStore()
    store.start_goal_creation(ADMIN_ID, CHAT_ID)
    titles = [f"title-{i}" for i in range(20)]

    threads = [
        threading.Thread(target=store.set_title, args=(ADMIN_ID, title))
        for title in titles
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    state = store.get_state(ADMIN_ID)
    assert state.title in titles
    assert state.step == GoalCreationStep.WAITING_FOR_DESCRIPTION
