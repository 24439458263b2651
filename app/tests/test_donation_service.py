"""
Tests for DonationService: registration, confirmation and failure of payments.
"""
import asyncio
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
import pytest_asyncio

from app.core.exceptions import (
    InvalidInputError,
    InvalidTransitionError,
    NotFoundError,
    UnknownPaymentError,
)
from app.db.transaction import atomic
from app.models.donation import DonationStatus
from app.schemas.telegram_user import TelegramUserEntity
from app.services.donation_service import DonationService
from app.services.goal_service import GoalService
from app.services.telegram_user_service import TelegramUserService

USER_ID = 555


@pytest_asyncio.fixture
async def user(telegram_user_service: TelegramUserService):
    return await telegram_user_service.get_or_create_telegram_user(
        TelegramUserEntity(user_id=USER_ID, username="donor", first_name="Donor")
    )


@pytest_asyncio.fixture
async def goal(goal_service: GoalService):
    return await goal_service.create_goal(
        admin_id=1, title="Roof Repair", description="Fix the roof", target_amount=Decimal("1000")
    )


async def _prepare(telegram_user_service: TelegramUserService, goal_service: GoalService):
    await telegram_user_service.get_or_create_telegram_user(TelegramUserEntity(user_id=USER_ID))
    await goal_service.create_goal(
        admin_id=1, title="Roof Repair", description=None, target_amount=Decimal("1000")
    )


async def _register(donation_service: DonationService, payment_id: str, amount: str = "300"):
    return await donation_service.register_donation(
        user_telegram_id=USER_ID,
        amount=Decimal(amount),
        currency="RUB",
        provider_payment_id=payment_id,
    )


@pytest.mark.asyncio
async def test_register_donation_binds_active_goal(donation_service, user, goal):
    donation = await _register(donation_service, "payment-1")

    assert donation.goal_id == goal.id
    assert donation.status == DonationStatus.PENDING
    assert await donation_service.is_payable("payment-1")


@pytest.mark.asyncio
async def test_register_donation_without_goal(donation_service, user):
    with pytest.raises(NotFoundError):
        await _register(donation_service, "payment-1")


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", ["0", "-10"])
async def test_register_donation_rejects_non_positive_amount(
        donation_service, user, goal, amount
):
    with pytest.raises(InvalidInputError):
        await _register(donation_service, "payment-1", amount=amount)


@pytest.mark.asyncio
async def test_confirm_donation_is_idempotent(donation_service, goal_service, user, goal):
    await _register(donation_service, "payment-1")

    first = await donation_service.confirm_donation("payment-1")
    second = await donation_service.confirm_donation("payment-1")

    assert first.current_amount == Decimal("300")
    assert second.current_amount == Decimal("300")
    assert not await donation_service.is_payable("payment-1")

    stats = await goal_service.get_goal_stats()
    assert stats.donations_count == 1
    assert stats.donors_count == 1


@pytest.mark.asyncio
async def test_confirm_unknown_payment(donation_service, goal_service, user, goal):
    with pytest.raises(UnknownPaymentError) as exc_info:
        await donation_service.confirm_donation("missing")

    assert exc_info.value.provider_payment_id == "missing"
    assert not await donation_service.is_payable("missing")
    assert (await goal_service.get_active_goal()).current_amount == Decimal("0")


@pytest.mark.asyncio
async def test_confirm_failed_donation(donation_service, goal_service, user, goal):
    await _register(donation_service, "payment-1")
    assert await donation_service.fail_donation("payment-1")

    with pytest.raises(InvalidTransitionError):
        await donation_service.confirm_donation("payment-1")

    active_goal = await goal_service.get_active_goal()
    assert active_goal.current_amount == Decimal("0")


@pytest.mark.asyncio
async def test_fail_donation(donation_service, user, goal):
    await _register(donation_service, "payment-1")

    assert await donation_service.fail_donation("payment-1") is True
    assert await donation_service.fail_donation("payment-1") is False
    assert not await donation_service.is_payable("payment-1")

    with pytest.raises(UnknownPaymentError):
        await donation_service.fail_donation("missing")


@pytest.mark.asyncio
async def test_fail_confirmed_donation(donation_service, user, goal):
    await _register(donation_service, "payment-1")
    await donation_service.confirm_donation("payment-1")

    with pytest.raises(InvalidTransitionError):
        await donation_service.fail_donation("payment-1")


@pytest.mark.asyncio
async def test_donation_stays_with_its_goal(donation_service, goal_service, user, goal):
    """Test a payment confirmed after a goal switch credits the goal it was made for."""
    await _register(donation_service, "payment-1")
    new_goal = await goal_service.create_goal(
        admin_id=1, title="Garden", description=None, target_amount=Decimal("500")
    )

    confirmed_goal = await donation_service.confirm_donation("payment-1")

    assert confirmed_goal.id == goal.id
    assert confirmed_goal.current_amount == Decimal("300")
    assert confirmed_goal.is_active is False

    stats = await goal_service.get_goal_stats()
    assert stats.goal.id == new_goal.id
    assert stats.goal.current_amount == Decimal("0")
    assert stats.donations_count == 0


@pytest.mark.asyncio
async def test_several_donations_accumulate(donation_service, goal_service, user, goal):
    for index, amount in enumerate(["100", "250", "650"]):
        await _register(donation_service, f"payment-{index}", amount=amount)
        await donation_service.confirm_donation(f"payment-{index}")

    stats = await goal_service.get_goal_stats()

    assert stats.goal.current_amount == Decimal("1000")
    assert stats.goal.progress_percent == 100
    assert stats.donations_count == 3
    assert stats.donors_count == 1


def test_concurrent_confirmations_credit_once(
        db, donation_service, goal_service, telegram_user_service, repository_donation
):
    """Test the same payment confirmed from many threads is counted once."""
    asyncio.run(_prepare(telegram_user_service, goal_service))
    asyncio.run(_register(donation_service, "payment-1"))

    def confirm(_):
        try:
            return asyncio.run(donation_service.confirm_donation("payment-1"))
        finally:
            db.remove_session()

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(confirm, range(16)))

    assert all(result.current_amount == Decimal("300") for result in results)

    with atomic(repository_donation.session):
        donation = repository_donation.get_by_provider_payment_id(
            "payment-1"
        )
    assert donation.status == DonationStatus.CONFIRMED
    assert asyncio.run(goal_service.get_active_goal()).current_amount == Decimal("300")


def test_concurrent_distinct_confirmations(
        db, donation_service, goal_service, telegram_user_service
):
    asyncio.run(_prepare(telegram_user_service, goal_service))
    payment_ids = [f"payment-{index}" for index in range(20)]
    for payment_id in payment_ids:
        asyncio.run(_register(donation_service, payment_id, amount="10"))

    def confirm(payment_id: str):
        try:
            asyncio.run(donation_service.confirm_donation(payment_id))
        finally:
            db.remove_session()

    with ThreadPoolExecutor(max_workers=8) as executor:
        list(executor.map(confirm, payment_ids))

    stats = asyncio.run(goal_service.get_goal_stats())
    assert stats.goal.current_amount == Decimal("200")
    assert stats.donations_count == 20
