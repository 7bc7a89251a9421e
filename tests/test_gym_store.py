"""Tests for the JSON gym store."""
import json

import pytest

from gym_enricher.exceptions import GymNotFoundError, GymStoreError
from gym_enricher.models import GymRecord
from gym_enricher.services import JsonGymStore


@pytest.fixture
def store_path(tmp_path):
    path = tmp_path / "data" / "gyms.json"
    path.parent.mkdir()
    path.write_text(
        json.dumps(
            [
                {"id": 2, "name": "베타피트니스", "address": "서울 서초구"},
                {"id": 1, "name": "알파짐"},
            ],
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )
    return path


class TestJsonGymStore:
    """Tests for JsonGymStore."""

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "gyms.json"
        JsonGymStore(path)
        assert json.loads(path.read_text(encoding="utf-8")) == []

    @pytest.mark.asyncio
    async def test_find_all_orders_by_id(self, store_path):
        async with JsonGymStore(store_path).session() as repository:
            gyms = await repository.find_all()
        assert [gym.id for gym in gyms] == [1, 2]
        assert gyms[1].address == "서울 서초구"

    @pytest.mark.asyncio
    async def test_save_persists(self, store_path):
        store = JsonGymStore(store_path)
        async with store.session() as repository:
            gym = (await repository.find_all())[0]
            await repository.save(gym.model_copy(update={"latitude": 37.5, "longitude": 127.0}))

        async with store.session() as repository:
            reloaded = (await repository.find_all())[0]
        assert reloaded.has_coordinates
        assert not store_path.with_suffix(".json.tmp").exists()

    @pytest.mark.asyncio
    async def test_save_inserts_new_gym(self, store_path):
        store = JsonGymStore(store_path)
        async with store.session() as repository:
            await repository.save(GymRecord(id=3, name="감마헬스장"))

        data = json.loads(store_path.read_text(encoding="utf-8"))
        assert [item["id"] for item in data] == [1, 2, 3]
        assert data[2]["name"] == "감마헬스장"

    @pytest.mark.asyncio
    async def test_update_fields(self, store_path):
        store = JsonGymStore(store_path)
        async with store.session() as repository:
            updated = await repository.update(1, {"phone": "02-123-4567"})
        assert updated.phone == "02-123-4567"
        assert updated.name == "알파짐"

    @pytest.mark.asyncio
    async def test_update_unknown_gym(self, store_path):
        async with JsonGymStore(store_path).session() as repository:
            with pytest.raises(GymNotFoundError):
                await repository.update(99, {"phone": "x"})

    @pytest.mark.asyncio
    async def test_corrupt_file_raises(self, store_path):
        store_path.write_text("{not json", encoding="utf-8")
        store = JsonGymStore(store_path)
        with pytest.raises(GymStoreError):
            async with store.session():
                pass
