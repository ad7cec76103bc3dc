"""
Package services - Tầng truy cập REST API (Supabase / PostgREST).

Mọi service dùng chung một SupabaseClient. Services raise exception
(xem exceptions.py); tầng UI bắt lại và hiển thị thông báo.
"""

from dataclasses import dataclass

from unival.config import AppConfig
from .admin_service import AdminService
from .auth_service import AuthService
from .catalog_service import CatalogService
from .comment_service import CommentService
from .schedule_service import ScheduleService
from .supabase_client import SupabaseClient


@dataclass
class Services:
    """Gom các service dùng chung cho toàn bộ giao diện."""

    client: SupabaseClient
    auth: AuthService
    catalog: CatalogService
    schedules: ScheduleService
    comments: CommentService
    admin: AdminService

    @classmethod
    def create(cls, config: AppConfig, session=None) -> "Services":
        client = SupabaseClient(config, session=session)
        return cls(
            client=client,
            auth=AuthService(client, config),
            catalog=CatalogService(client),
            schedules=ScheduleService(client),
            comments=CommentService(client),
            admin=AdminService(client),
        )


__all__ = [
    'Services', 'SupabaseClient', 'AuthService', 'CatalogService',
    'ScheduleService', 'CommentService', 'AdminService',
]
