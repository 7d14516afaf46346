"""Domain-level policies and business rules.

This package contains logic that defines *what* the business rules are,
independent from *where* they are applied (services, repositories, etc.).
"""

ADMIN = "admin"
BUILDING_MANAGER = "building_manager"
RESIDENT = "resident"
OWNER = "owner"
USER = "user"

# Roles allowed to manage apartments and decide lease requests
STAFF_ROLES = (ADMIN, BUILDING_MANAGER)
