"""
Tests for database URL checks and repository ordering
"""
import pytest

from crud.design import DesignRepository
from crud.project import ProjectRepository
from database import check_database_url


def test_sqlite_allowed_outside_production():
    url = "sqlite+aiosqlite:///./startups.db"
    assert check_database_url(url, production=False) == url


def test_sqlite_forbidden_in_production():
    with pytest.raises(RuntimeError, match="SQLite is forbidden"):
        check_database_url("sqlite+aiosqlite:///./startups.db", production=True)


def test_empty_url_rejected():
    with pytest.raises(RuntimeError):
        check_database_url("", production=False)


@pytest.mark.asyncio
async def test_project_insert_returns_id_and_lists_newest_first(test_db):
    repo = ProjectRepository(test_db)
    first = await repo.insert({"project_title": "أ", "logo": "uploads/1-a.png"})
    second = await repo.insert({"project_title": "ب"})

    projects = await repo.list_all_by_recency()

    assert [p.id for p in projects] == [second, first]
    assert projects[1].to_dict()["logo"] == "uploads/1-a.png"
    assert projects[0].to_dict()["pdf_file"] is None


@pytest.mark.asyncio
async def test_designs_are_scoped_to_student(test_db):
    repo = DesignRepository(test_db)
    await repo.save("stu-1", "logo", '{"palette": "blue"}')
    await repo.save("stu-2", "cover")

    designs = await repo.list_for_student("stu-1")

    assert len(designs) == 1
    assert designs[0].to_dict()["design_data"] == '{"palette": "blue"}'
