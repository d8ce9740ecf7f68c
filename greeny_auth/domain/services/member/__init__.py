from .member_service import MemberService

__all__ = ["MemberService"]
