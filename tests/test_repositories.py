"""
Tests for the entity repositories: uniqueness, merge updates, deletion,
search and pagination.
"""

import math

import pytest

from employee_api.core.exceptions import ConflictError, NotFoundError, StoreError
from employee_api.db.seed import SEED_EMPLOYEES, sample_employees
from employee_api.db.store import InMemoryStore, JsonFileStore
from employee_api.repositories.employees import EmployeeRepository, EmployeeStatus
from employee_api.repositories.users import UserRepository

from .conftest import make_employee


@pytest.fixture
def seeded_repo() -> EmployeeRepository:
    return EmployeeRepository(InMemoryStore(seed=sample_employees))


class TestCreateAndFind:
    def test_create_assigns_id_and_timestamps(self, employee_repo):
        data = make_employee()
        created = employee_repo.create(data)

        assert created.id
        assert created.created_at == created.updated_at
        assert created.avatar_url is None
        assert created.is_active is True

        found = employee_repo.find_by_id(created.id)
        assert found == created
        for key, value in data.items():
            assert getattr(found, key) == value

    def test_create_generates_distinct_ids(self, employee_repo):
        a = employee_repo.create(make_employee(username="alpha", email="a@x.com"))
        b = employee_repo.create(make_employee(username="bravo", email="b@x.com"))
        assert a.id != b.id

    def test_caller_cannot_choose_id_or_timestamps(self, employee_repo):
        created = employee_repo.create(make_employee(id="chosen", created_at="2000-01-01T00:00:00Z"))
        assert created.id != "chosen"
        assert created.created_at.year != 2000

    def test_duplicate_username_conflicts(self, employee_repo):
        employee_repo.create(make_employee())
        with pytest.raises(ConflictError) as exc_info:
            employee_repo.create(make_employee(email="other@company.com"))
        assert exc_info.value.message == "Username already exists"
        assert employee_repo.count() == 1

    def test_duplicate_email_conflicts(self, employee_repo):
        employee_repo.create(make_employee())
        with pytest.raises(ConflictError) as exc_info:
            employee_repo.create(make_employee(username="someoneelse"))
        assert exc_info.value.message == "Email already exists"

    def test_username_match_is_case_sensitive(self, employee_repo):
        employee_repo.create(make_employee())
        employee_repo.create(make_employee(username="TestPerson", email="upper@company.com"))
        assert employee_repo.find_by_username("testperson").email == "test.person@company.com"
        assert employee_repo.find_by_username("TESTPERSON") is None

    def test_find_returns_none_when_absent(self, employee_repo):
        assert employee_repo.find_by_id("missing") is None
        assert employee_repo.find_by_username("missing") is None
        assert employee_repo.find_by_email("missing@company.com") is None

    def test_users_and_employees_are_separate_namespaces(self, user_repo, employee_repo):
        # "admin"/"admin@example.com" belong to a seed user
        employee = employee_repo.create(make_employee(username="admin", email="admin@example.com"))
        assert employee.username == "admin"
        assert user_repo.find_by_username("admin").id == "1"

    def test_persists_through_json_file(self, tmp_path):
        path = tmp_path / "employees.json"
        EmployeeRepository(JsonFileStore(path)).create(make_employee())

        reopened = EmployeeRepository(JsonFileStore(path))
        assert reopened.find_by_username("testperson").full_name == "Test Person"
        assert '"fullName": "Test Person"' in path.read_text(encoding="utf-8")

    def test_malformed_record_raises_store_error(self):
        repo = EmployeeRepository(InMemoryStore([{"id": "x", "username": "only"}]))
        with pytest.raises(StoreError):
            repo.find_by_id("x")


class TestUpdate:
    def test_partial_update_keeps_other_fields(self, employee_repo):
        created = employee_repo.create(make_employee(avatar_url="https://img.example.com/a.png"))
        updated = employee_repo.update(created.id, {"position": "Controller"})

        assert updated.position == "Controller"
        assert updated.full_name == created.full_name
        assert updated.avatar_url == "https://img.example.com/a.png"
        assert updated.created_at == created.created_at
        assert employee_repo.find_by_id(created.id) == updated

    def test_update_always_advances_updated_at(self, employee_repo):
        created = employee_repo.create(make_employee())
        first = employee_repo.update(created.id, {})
        second = employee_repo.update(created.id, {"phone": "123"})
        assert created.updated_at < first.updated_at < second.updated_at

    def test_update_cannot_change_id(self, employee_repo):
        created = employee_repo.create(make_employee())
        updated = employee_repo.update(created.id, {"id": "hijack", "department": "Ops"})
        assert updated.id == created.id
        assert employee_repo.find_by_id("hijack") is None

    def test_update_missing_raises_not_found(self, employee_repo):
        with pytest.raises(NotFoundError) as exc_info:
            employee_repo.update("missing", {"position": "x"})
        assert exc_info.value.message == "Employee not found"

    def test_update_conflicts_with_other_record(self, employee_repo):
        employee_repo.create(make_employee())
        other = employee_repo.create(make_employee(username="other", email="other@company.com"))

        with pytest.raises(ConflictError):
            employee_repo.update(other.id, {"username": "testperson"})
        with pytest.raises(ConflictError):
            employee_repo.update(other.id, {"email": "test.person@company.com"})
        assert employee_repo.find_by_id(other.id).username == "other"

    def test_update_may_keep_own_unique_values(self, employee_repo):
        created = employee_repo.create(make_employee())
        updated = employee_repo.update(
            created.id, {"username": "testperson", "email": "test.person@company.com"}
        )
        assert updated.username == "testperson"

    def test_explicit_none_clears_optional_field(self, employee_repo):
        created = employee_repo.create(make_employee(avatar_url="https://img.example.com/a.png"))
        assert employee_repo.update(created.id, {"avatar_url": None}).avatar_url is None


class TestDelete:
    def test_delete_then_find_returns_none(self, employee_repo):
        created = employee_repo.create(make_employee())
        employee_repo.delete(created.id)
        assert employee_repo.find_by_id(created.id) is None
        assert employee_repo.count() == 0

    def test_delete_missing_raises_not_found(self, employee_repo):
        with pytest.raises(NotFoundError):
            employee_repo.delete("missing")

    def test_deleted_username_can_be_reused(self, employee_repo):
        created = employee_repo.create(make_employee())
        employee_repo.delete(created.id)
        assert employee_repo.create(make_employee()).id != created.id


class TestSearchAndPagination:
    def test_seed_page_two_of_five(self, seeded_repo):
        page = seeded_repo.find_all(page=2, per_page=5)
        assert len(page.items) == 5
        assert page.total == 12
        assert page.total_pages == 3

    def test_last_page_is_partial(self, seeded_repo):
        page = seeded_repo.find_all(page=3, per_page=5)
        assert len(page.items) == 2

    def test_page_beyond_end_is_empty(self, seeded_repo):
        page = seeded_repo.find_all(page=9, per_page=5)
        assert page.items == []
        assert page.total == 12

    @pytest.mark.parametrize("per_page", [1, 2, 5, 7, 12, 50])
    def test_pages_reconstruct_collection_in_order(self, seeded_repo, per_page):
        first = seeded_repo.find_all(page=1, per_page=per_page)
        assert first.total_pages == math.ceil(12 / per_page)

        collected = []
        for n in range(1, first.total_pages + 1):
            collected.extend(e.username for e in seeded_repo.find_all(page=n, per_page=per_page).items)
        assert collected == [row[1] for row in SEED_EMPLOYEES]

    def test_pages_reconstruct_filtered_set(self, seeded_repo):
        matched = [e.id for e in seeded_repo.find_all(search="er", page=1, per_page=100).items]
        collected = []
        page = seeded_repo.find_all(search="er", page=1, per_page=3)
        for n in range(1, page.total_pages + 1):
            collected.extend(e.id for e in seeded_repo.find_all(search="er", page=n, per_page=3).items)
        assert collected == matched
        assert len(set(collected)) == len(collected)

    def test_search_engineering(self, seeded_repo):
        expected = [
            row[1] for row in SEED_EMPLOYEES
            if "engineering" in row[4].lower() or "engineering" in row[5].lower()
        ]
        page = seeded_repo.find_all(search="Engineering", per_page=100)
        assert [e.username for e in page.items] == expected
        assert page.total == 5

    @pytest.mark.parametrize(
        "term, username",
        [
            ("JOHN DOE", "johndoe"),  # full name
            ("MICHAELJ", "michaelj"),  # username
            ("lisa.anderson@", "lisaa"),  # email
            ("human res", "sarahb"),  # department
            ("data analyst", "robertt"),  # position
        ],
    )
    def test_search_matches_any_field_case_insensitively(self, seeded_repo, term, username):
        page = seeded_repo.find_all(search=term, per_page=100)
        assert [e.username for e in page.items] == [username]

    def test_search_without_match(self, seeded_repo):
        page = seeded_repo.find_all(search="zzz-nobody", per_page=10)
        assert page.items == []
        assert page.total == 0
        assert page.total_pages == 0

    def test_status_filter(self, seeded_repo):
        target = seeded_repo.find_by_username("janesmith")
        seeded_repo.update(target.id, {"is_active": False})

        inactive = seeded_repo.find_all(status=EmployeeStatus.INACTIVE)
        active = seeded_repo.find_all(status="active", per_page=100)
        assert [e.username for e in inactive.items] == ["janesmith"]
        assert active.total == 11
        assert seeded_repo.find_all(status=EmployeeStatus.ALL).total == 12

    def test_count_ignores_filters(self, seeded_repo):
        seeded_repo.find_all(search="Engineering")
        assert seeded_repo.count() == 12

    def test_count_by_status(self, seeded_repo):
        target = seeded_repo.find_by_username("davidw")
        seeded_repo.update(target.id, {"is_active": False})
        assert seeded_repo.count_by_status() == {"total": 12, "active": 11, "inactive": 1}

    def test_rejects_page_below_one(self, seeded_repo):
        with pytest.raises(ValueError):
            seeded_repo.find_all(page=0)


class TestUserRepository:
    def test_seed_users(self, user_repo):
        admin = user_repo.find_by_username("admin")
        assert admin.id == "1"
        assert admin.role == "admin"
        assert user_repo.find_by_email("user@example.com").id == "2"
        assert user_repo.count() == 2

    def test_user_uniqueness(self, user_repo):
        with pytest.raises(ConflictError):
            user_repo.create(
                {"username": "admin", "email": "new@example.com", "password_hash": "x", "full_name": "X"}
            )
        with pytest.raises(ConflictError):
            user_repo.create(
                {"username": "newbie", "email": "user@example.com", "password_hash": "x", "full_name": "X"}
            )

    def test_user_search(self, user_repo):
        page = user_repo.find_all(search="REGULAR")
        assert [u.username for u in page.items] == ["user"]

    def test_user_role_defaults_to_user(self):
        repo = UserRepository(InMemoryStore())
        created = repo.create({"username": "z", "email": "z@x.com", "password_hash": "h", "full_name": "Z"})
        assert created.role == "user"
