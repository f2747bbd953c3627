from .role_assignment import RoleAssignmentRepository, UnitKind, CHAPTER, ZONE

__all__ = ["RoleAssignmentRepository", "UnitKind", "CHAPTER", "ZONE"]
