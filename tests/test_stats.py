import asyncio

import pytest

from fixtures_seed import submission


@pytest.mark.asyncio
async def test_stats_on_empty_store(backend):
    stats = await backend.moderation.stats(authorized=True)

    assert stats.total_listings == 0
    assert stats.total_users == 0
    assert stats.total_payments == 0
    assert stats.total_revenue == 0


@pytest.mark.asyncio
async def test_revenue_is_sum_of_transactions(backend):
    await backend.listings.create(submission(), [])
    await backend.users.create("Ben", "+243810000000")
    amounts = [100, 250.5, 40, 75]
    payments = [(await backend.payments.create("usr_1", "lst_1", a))[0] for a in amounts]

    # approve 0, 1, 3 (1 twice), reject 2 and 3 afterwards
    await asyncio.gather(
        backend.payments.approve(payments[0].id),
        backend.payments.approve(payments[1].id),
        backend.payments.approve(payments[1].id),
        backend.payments.reject(payments[2].id),
        backend.payments.approve(payments[3].id),
    )
    await backend.payments.reject(payments[3].id, "annulé")

    stats = await backend.moderation.stats(authorized=True)
    ledger = await backend.payments.list_transactions()

    assert stats.total_listings == 1
    assert stats.total_users == 1
    assert stats.total_payments == 4
    assert stats.total_revenue == sum(t.amount for t in ledger) == 100 + 250.5 + 75
    assert stats.model_dump(by_alias=True)["revenusTotaux"] == stats.total_revenue
