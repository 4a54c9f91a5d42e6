"""
Management commands.

    python -m flexhub.manage create-super-admin --email admin@example.com --password ...
    python -m flexhub.manage create-invite --email editor@example.com --role ADMIN --invited-by admin@example.com
    python -m flexhub.manage enable-feature --site <site id> --feature JOB_BOARD
"""
import argparse
import asyncio
import logging
import sys
from uuid import UUID

from flexhub.config import settings
from flexhub.database import get_db_context, init_db
from flexhub.models.site import FeatureType
from flexhub.models.user import UserRole
from flexhub.schemas.site import SiteFeatureCreate, SiteFeatureUpdate
from flexhub.services.feature_service import FeatureService
from flexhub.services.invite_service import InviteService
from flexhub.services.site_service import SiteService
from flexhub.services.user_service import UserService

logger = logging.getLogger("flexhub.manage")


async def create_super_admin(email: str, name: str | None, password: str | None) -> None:
    async with get_db_context() as db:
        service = UserService(db)
        user = await service.get_by_email(email)
        if user:
            user.role = UserRole.SUPERADMIN
            user.is_active = True
            await db.flush()
            logger.info(f"Promoted existing user {email} to SUPERADMIN")
            return
        await service.create(email=email, name=name, role=UserRole.SUPERADMIN, password=password)
        logger.info(f"Created SUPERADMIN {email}")


async def create_invite(email: str, role: UserRole, invited_by: str) -> None:
    async with get_db_context() as db:
        inviter = await UserService(db).get_by_email(invited_by)
        if inviter is None:
            raise SystemExit(f"Unknown inviter: {invited_by}")
        invite = await InviteService(db).create(email, role, inviter)
        logger.info(f"Invited {email} as {role.value}, token {invite.token}, expires {invite.expires_at}")


async def enable_feature(site_id: UUID, feature: FeatureType, disable: bool) -> None:
    async with get_db_context() as db:
        site = await SiteService(db).get_by_id(site_id)
        if site is None:
            raise SystemExit(f"Unknown site: {site_id}")

        service = FeatureService(db)
        existing = await service.get_by_type(site.id, feature)
        if existing:
            await service.update(existing, SiteFeatureUpdate(is_enabled=not disable))
        else:
            await service.add(site.id, SiteFeatureCreate(feature=feature, is_enabled=not disable))
        logger.info(f"{feature.value} {'disabled' if disable else 'enabled'} for site {site.name}")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="flexhub.manage", description="FlexHub management commands.")
    commands = parser.add_subparsers(dest="command", required=True)

    admin = commands.add_parser("create-super-admin", help="Create or promote a super admin.")
    admin.add_argument("--email", required=True)
    admin.add_argument("--name", default=None)
    admin.add_argument("--password", default=None, help="Enables /auth/login for this account.")

    invite = commands.add_parser("create-invite", help="Invite an email address.")
    invite.add_argument("--email", required=True)
    invite.add_argument("--role", type=UserRole, choices=list(UserRole), default=UserRole.USER)
    invite.add_argument("--invited-by", required=True, help="Email of the inviting user.")

    feature = commands.add_parser("enable-feature", help="Enable (or disable) a feature on a site.")
    feature.add_argument("--site", type=UUID, required=True)
    feature.add_argument("--feature", type=FeatureType, choices=list(FeatureType), required=True)
    feature.add_argument("--disable", action="store_true")

    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> None:
    await init_db()
    if args.command == "create-super-admin":
        await create_super_admin(args.email, args.name, args.password)
    elif args.command == "create-invite":
        await create_invite(args.email, args.role, args.invited_by)
    elif args.command == "enable-feature":
        await enable_feature(args.site, args.feature, args.disable)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(message)s")
    asyncio.run(run(parse_args(argv)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
