"""
Состояние мастера создания цели.

Хранится только в памяти процесса: для каждого администратора
своя запись и свой замок, разные администраторы друг друга не блокируют.
"""
import enum
import threading
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Protocol

from loguru import logger


class GoalCreationStep(enum.Enum):
    NONE = "none"
    WAITING_FOR_TITLE = "waiting_for_title"
    WAITING_FOR_DESCRIPTION = "waiting_for_description"
    WAITING_FOR_AMOUNT = "waiting_for_amount"


@dataclass
class GoalCreationState:
    chat_id: int
    title: str | None = None
    description: str | None = None
    target_amount: Decimal | None = None
    step: GoalCreationStep = GoalCreationStep.NONE

    @property
    def is_complete(self) -> bool:
        return (
            self.step == GoalCreationStep.NONE
            and self.title is not None
            and self.description is not None
            and self.target_amount is not None
        )


class ConversationStateStore(Protocol):
    def start_goal_creation(self, admin_id: int, chat_id: int) -> None: ...

    def get_state(self, admin_id: int) -> GoalCreationState | None: ...

    def set_title(self, admin_id: int, title: str) -> None: ...

    def set_description(self, admin_id: int, description: str) -> None: ...

    def set_amount(self, admin_id: int, amount: Decimal) -> None: ...

    def cancel_goal_creation(self, admin_id: int) -> None: ...

    def is_user_creating_goal(self, admin_id: int) -> bool: ...


class GoalCreationStateStore:
    """Хранилище состояний мастера, синхронизированное по ключу admin_id"""

    def __init__(self) -> None:
        self._states: dict[int, GoalCreationState] = {}
        self._locks: dict[int, threading.Lock] = {}
        self._registry_lock = threading.Lock()
        self.reads = 0

    def _lock_for(self, admin_id: int) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(admin_id)
            if lock is None:
                lock = self._locks[admin_id] = threading.Lock()
            return lock

    @property
    def active_state_count(self) -> int:
        return len(self._states)

    def start_goal_creation(self, admin_id: int, chat_id: int) -> None:
        with self._lock_for(admin_id):
            self._states[admin_id] = GoalCreationState(
                chat_id=chat_id,
                step=GoalCreationStep.WAITING_FOR_TITLE,
            )
        logger.info(f"Администратор {admin_id} начал создание цели в чате {chat_id}")

    def get_state(self, admin_id: int) -> GoalCreationState | None:
        """Копия состояния, изменения копии на хранилище не влияют"""
        with self._lock_for(admin_id):
            with self._registry_lock:
                self.reads += 1
            state = self._states.get(admin_id)
            return replace(state) if state else None

    def _advance(self, admin_id: int, field: str, value, next_step: GoalCreationStep) -> None:
        with self._lock_for(admin_id):
            state = self._states.get(admin_id)
            if state is None:
                logger.warning(
                    f"Попытка заполнить {field} без начатого мастера: {admin_id}"
                )
                return

            setattr(state, field, value)
            state.step = next_step

        logger.debug(f"Администратор {admin_id}: {field} заполнено, шаг {next_step.value}")

    def set_title(self, admin_id: int, title: str) -> None:
        self._advance(admin_id, "title", title, GoalCreationStep.WAITING_FOR_DESCRIPTION)

    def set_description(self, admin_id: int, description: str) -> None:
        self._advance(
            admin_id, "description", description, GoalCreationStep.WAITING_FOR_AMOUNT
        )

    def set_amount(self, admin_id: int, amount: Decimal) -> None:
        self._advance(admin_id, "target_amount", amount, GoalCreationStep.NONE)

    def cancel_goal_creation(self, admin_id: int) -> None:
        with self._lock_for(admin_id):
            removed = self._states.pop(admin_id, None)

        if removed:
            logger.info(f"Создание цели отменено: {admin_id}")

    def is_user_creating_goal(self, admin_id: int) -> bool:
        with self._lock_for(admin_id):
            state = self._states.get(admin_id)
            return state is not None and state.step != GoalCreationStep.NONE
