"""Unit tests for InMemoryTaskRepository and its owner arenas."""

from __future__ import annotations

import pytest

from taskledger.adapters.memory import InMemoryTaskRepository, OwnerPartition
from taskledger.models import NotFoundError, Priority, TaskCreate

NOW = 1_000


@pytest.fixture
def repo():
    return InMemoryTaskRepository()


class TestOwnerPartition:
    def test_swap_and_pop_moves_last_into_hole(self):
        partition = OwnerPartition()
        for task_id in range(4):
            partition.append_live(task_id)

        partition.remove_live(1)

        assert partition.live_ids == [0, 3, 2]
        assert partition.positions == {0: 0, 3: 1, 2: 2}

    def test_remove_last_entry(self):
        partition = OwnerPartition()
        partition.append_live(0)
        partition.append_live(1)

        partition.remove_live(1)

        assert partition.live_ids == [0]
        assert partition.positions == {0: 0}

    def test_is_live_bounds(self):
        partition = OwnerPartition()
        assert not partition.is_live(0)
        assert not partition.is_live(-1)


class TestInMemoryTaskRepository:
    @pytest.mark.asyncio
    async def test_create_assigns_sequential_ids(self, repo):
        first = await repo.create("alice", TaskCreate(content="a"), NOW)
        second = await repo.create("alice", TaskCreate(content="b", priority=Priority.HIGH), NOW)

        assert (first.id, second.id) == (0, 1)
        assert second.priority == Priority.HIGH
        assert (await repo.create("bob", TaskCreate(content="c"), NOW)).id == 0

    @pytest.mark.asyncio
    async def test_enumeration_after_delete_is_swap_order(self, repo):
        for content in ("a", "b", "c", "d"):
            await repo.create("alice", TaskCreate(content=content), NOW)

        await repo.delete("alice", 0)

        assert [t.id for t in await repo.list_all("alice")] == [3, 1, 2]

    @pytest.mark.asyncio
    async def test_deleted_slot_kept_but_not_found(self, repo):
        await repo.create("alice", TaskCreate(content="a"), NOW)
        await repo.delete("alice", 0)

        with pytest.raises(NotFoundError):
            await repo.get("alice", 0)
        assert repo._partitions["alice"].slots[0].content == "a"
        assert repo._partitions["alice"].exists == [False]

    @pytest.mark.asyncio
    async def test_save_replaces_record(self, repo):
        task = await repo.create("alice", TaskCreate(content="a"), NOW)
        await repo.save(task.model_copy(update={"content": "b", "updated_at": NOW + 1}))

        stored = await repo.get("alice", 0)
        assert stored.content == "b"
        assert stored.updated_at == NOW + 1

    @pytest.mark.asyncio
    async def test_save_deleted_task_not_found(self, repo):
        task = await repo.create("alice", TaskCreate(content="a"), NOW)
        await repo.delete("alice", 0)
        with pytest.raises(NotFoundError):
            await repo.save(task)

    @pytest.mark.asyncio
    async def test_unknown_owner(self, repo):
        assert await repo.list_all("nobody") == []
        with pytest.raises(NotFoundError):
            await repo.get("nobody", 0)
        with pytest.raises(NotFoundError):
            await repo.delete("nobody", 0)
