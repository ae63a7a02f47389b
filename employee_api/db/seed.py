"""
Seed data for the JSON document stores.

Seeds:
- Two users: admin/admin123 (admin) and user/user123 (user)
- Twelve sample employees across Engineering, Product, Design, Marketing,
  Human Resources, Analytics and Sales

The users document is initialized with `default_users()` automatically the
first time it is opened. Running this module rewrites both documents:

Usage:
  python -m employee_api.db.seed
  python -m employee_api.db.seed --data-dir /tmp/employee-data
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from employee_api.core.logging import configure_logging
from employee_api.core.security import get_password_hash
from employee_api.core.settings import AppSettings
from employee_api.db.config import StoreSettings, get_store_settings
from employee_api.db.models import Employee, Role, User, utcnow
from employee_api.db.store import JsonFileStore

logger = logging.getLogger(__name__)

# id, username, email, password, full name, role
SEED_USERS = (
    ("1", "admin", "admin@example.com", "admin123", "Admin User", Role.ADMIN),
    ("2", "user", "user@example.com", "user123", "Regular User", Role.USER),
)

# full name, username, email, phone, position, department
SEED_EMPLOYEES = (
    ("John Doe", "johndoe", "john.doe@company.com", "+1 (555) 123-4567", "Senior Software Engineer", "Engineering"),
    ("Jane Smith", "janesmith", "jane.smith@company.com", "+1 (555) 234-5678", "Product Manager", "Product"),
    ("Michael Johnson", "michaelj", "michael.johnson@company.com", "+1 (555) 345-6789", "UX Designer", "Design"),
    ("Emily Davis", "emilyd", "emily.davis@company.com", "+1 (555) 456-7890", "Marketing Director", "Marketing"),
    ("David Wilson", "davidw", "david.wilson@company.com", "+1 (555) 567-8901", "DevOps Engineer", "Engineering"),
    ("Sarah Brown", "sarahb", "sarah.brown@company.com", "+1 (555) 678-9012", "HR Manager", "Human Resources"),
    ("Robert Taylor", "robertt", "robert.taylor@company.com", "+1 (555) 789-0123", "Data Analyst", "Analytics"),
    ("Lisa Anderson", "lisaa", "lisa.anderson@company.com", "+1 (555) 890-1234", "Sales Manager", "Sales"),
    ("James Martinez", "jamesm", "james.martinez@company.com", "+1 (555) 901-2345", "QA Engineer", "Engineering"),
    ("Jennifer Garcia", "jenniferr", "jennifer.garcia@company.com", "+1 (555) 012-3456", "Content Writer", "Marketing"),
    ("William Lee", "williaml", "william.lee@company.com", "+1 (555) 123-4560", "Backend Developer", "Engineering"),
    ("Amanda White", "amandaw", "amanda.white@company.com", "+1 (555) 234-5601", "Frontend Developer", "Engineering"),
)


# PUBLIC_INTERFACE
def default_users(settings: Optional[AppSettings] = None) -> List[Dict[str, Any]]:
    """Seed user documents with freshly hashed passwords."""
    now = utcnow()
    return [
        User(
            id=user_id,
            username=username,
            email=email,
            password_hash=get_password_hash(password, settings),
            full_name=full_name,
            role=role,
            created_at=now,
            updated_at=now,
        ).to_document()
        for user_id, username, email, password, full_name, role in SEED_USERS
    ]


# PUBLIC_INTERFACE
def sample_employees() -> List[Dict[str, Any]]:
    """Sample employee documents, all active, with generated ids."""
    now = utcnow()
    return [
        Employee(
            id=str(uuid4()),
            full_name=full_name,
            username=username,
            email=email,
            phone=phone,
            position=position,
            department=department,
            avatar_url=f"https://i.pravatar.cc/150?img={n}",
            is_active=True,
            created_at=now,
            updated_at=now,
        ).to_document()
        for n, (full_name, username, email, phone, position, department) in enumerate(SEED_EMPLOYEES, start=1)
    ]


# PUBLIC_INTERFACE
def seed_all(settings: Optional[StoreSettings] = None) -> Dict[str, int]:
    """
    Overwrite both documents with the seed users and sample employees.

    Returns:
        Number of records written per collection.
    """
    settings = settings or get_store_settings()
    users = default_users()
    employees = sample_employees()

    JsonFileStore(settings.users_path, strict=settings.STORE_STRICT_LOAD).save(users)
    logger.info("Users seeded: %d (admin/admin123, user/user123)", len(users))

    JsonFileStore(settings.employees_path, strict=settings.STORE_STRICT_LOAD).save(employees)
    logger.info("Employees seeded: %d", len(employees))

    return {"users": len(users), "employees": len(employees)}


# PUBLIC_INTERFACE
def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entrypoint for `python -m employee_api.db.seed`."""
    parser = argparse.ArgumentParser(description="Seed the employee API data directory.")
    parser.add_argument("--data-dir", type=Path, default=None, help="Override DATA_DIR")
    args = parser.parse_args(argv)

    configure_logging()
    settings = get_store_settings()
    if args.data_dir is not None:
        settings = settings.model_copy(update={"DATA_DIR": args.data_dir})

    logger.info("Seeding data directory %s", settings.DATA_DIR)
    seed_all(settings)
    logger.info("Seed completed.")


if __name__ == "__main__":
    main()
