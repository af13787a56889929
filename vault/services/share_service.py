"""Share service: share records and the derived shared state of items."""

from typing import Any, Dict, List, Union

from pydantic import ValidationError as PydanticValidationError

from common.constants import ITEM_TYPES, MAX_PASSWORD_BYTES, SHARE_CHANNELS
from common.logging_config import get_logger
from vault.clock import Clock
from vault.exceptions import ItemNotFoundError, ValidationError
from vault.repositories.file_repository import FileRepository
from vault.repositories.folder_repository import FolderRepository
from vault.repositories.share_repository import ShareRepository
from vault.schemas.shares import ShareSettings
from vault.security import hash_password, verify_password
from vault.types import ShareRecord
from vault.utils import generate_id

logger = get_logger(__name__)


class ShareService:
    def __init__(
        self,
        share_repo: ShareRepository,
        folder_repo: FolderRepository,
        file_repo: FileRepository,
        clock: Clock,
    ):
        self.share_repo = share_repo
        self.folder_repo = folder_repo
        self.file_repo = file_repo
        self.clock = clock

    def share_item(
        self,
        item_type: str,
        item_id: str,
        settings: Union[ShareSettings, Dict[str, Any]],
        channel: str = "link",
    ) -> ShareRecord:
        """
        Create a share record for a file or folder.

        Args:
            item_type: "file" or "folder"
            item_id: Id of the shared item
            settings: ShareSettings or a plain dict of settings
            channel: "link" or "email"

        Returns:
            The new ShareRecord

        Raises:
            ValidationError: If any setting is invalid; nothing is created
            ItemNotFoundError: If the item does not exist
        """
        logger.info(f"Sharing {item_type} {item_id} via {channel}")
        parsed = self._validate(item_type, item_id, settings, channel)

        record = ShareRecord(
            share_id=generate_id("share"),
            type=item_type,
            item_id=item_id,
            access=parsed.access,
            expiration=parsed.expiration,
            created_at=self.clock.now(),
            custom_expiration=parsed.custom_expiration if parsed.expiration == "custom" else None,
            require_password=parsed.require_password,
            password_hash=hash_password(parsed.password) if parsed.require_password else None,
            allowed_emails=tuple(parsed.allowed_emails),
            channel=channel,
        )
        self.share_repo.add(record)
        logger.info(
            f"Created share {record.share_id} for {item_type} {item_id} "
            f"[access={record.access}, refs={self.share_repo.ref_count(item_type, item_id)}]"
        )
        return record

    def _validate(
        self,
        item_type: str,
        item_id: str,
        settings: Union[ShareSettings, Dict[str, Any]],
        channel: str,
    ) -> ShareSettings:
        if item_type not in ITEM_TYPES:
            raise ValidationError(f"Unknown item type '{item_type}'")
        if channel not in SHARE_CHANNELS:
            raise ValidationError(f"Unknown share channel '{channel}'")

        if isinstance(settings, ShareSettings):
            parsed = settings
        else:
            try:
                parsed = ShareSettings.model_validate(settings or {})
            except PydanticValidationError as e:
                logger.warning(f"Share rejected: invalid settings for {item_type} {item_id}")
                raise ValidationError(f"Invalid share settings: {e.errors()[0]['msg']}") from e

        if parsed.require_password and not (parsed.password or "").strip():
            logger.warning("Share rejected: password required but missing")
            raise ValidationError("Please enter a password")
        if parsed.require_password and len(parsed.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            logger.warning("Share rejected: password too long")
            raise ValidationError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")

        if parsed.expiration == "custom":
            if parsed.custom_expiration is None:
                logger.warning("Share rejected: custom expiration without a date")
                raise ValidationError("Please select a custom expiration date")
            if parsed.custom_expiration < self.clock.now().date():
                logger.warning(f"Share rejected: custom expiration {parsed.custom_expiration} is in the past")
                raise ValidationError("Custom expiration date cannot be in the past")

        if channel == "email" and not parsed.allowed_emails:
            logger.warning("Share rejected: email channel without recipients")
            raise ValidationError("Please enter at least one email address")

        exists = self.file_repo.exists(item_id) if item_type == "file" else self.folder_repo.exists(item_id)
        if not exists:
            logger.warning(f"Share rejected: {item_type} {item_id} not found")
            raise ItemNotFoundError(f"{item_type.capitalize()} '{item_id}' does not exist")

        return parsed

    def remove_share(self, share_id: str) -> bool:
        """
        Delete a share record. Unknown ids are a no-op.

        Returns:
            True if a record was removed
        """
        record = self.share_repo.delete(share_id)
        if record is None:
            logger.debug(f"Remove share ignored: {share_id} not found")
            return False
        still_shared = self.share_repo.is_shared(record.type, record.item_id)
        logger.info(
            f"Removed share {share_id} for {record.type} {record.item_id} [still_shared={still_shared}]"
        )
        return True

    def remove_shares_for(self, item_type: str, item_id: str) -> List[ShareRecord]:
        """Cascade: drop every share referencing an item that is being deleted."""
        removed = self.share_repo.delete_for_item(item_type, item_id)
        if removed:
            logger.info(f"Cascaded removal of {len(removed)} share(s) for {item_type} {item_id}")
        return removed

    def purge_expired(self) -> List[ShareRecord]:
        now = self.clock.now()
        expired = [record for record in self.share_repo.all() if record.is_expired(now)]
        for record in expired:
            self.share_repo.delete(record.share_id)
        if expired:
            logger.info(f"Purged {len(expired)} expired share(s)")
        return expired

    def verify_share_password(self, share_id: str, password: str) -> bool:
        record = self.share_repo.get(share_id)
        if record is None:
            return False
        if not record.require_password:
            return True
        if not record.password_hash or not password:
            return False
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            return False
        return verify_password(password, record.password_hash)

    def is_shared(self, item_type: str, item_id: str) -> bool:
        return self.share_repo.is_shared(item_type, item_id)

    def shares_for(self, item_type: str, item_id: str) -> List[ShareRecord]:
        return sorted(self.share_repo.for_item(item_type, item_id), key=lambda r: r.created_at)

    def list_shares(self) -> List[ShareRecord]:
        return sorted(self.share_repo.all(), key=lambda r: r.created_at)
