# =============================================================================
# core/services/upload_service.py - Profile Image Upload Pipeline
# =============================================================================
# Attaches an uploaded image to a user:
#   1. resolve the user        (UserNotFoundError, nothing uploaded)
#   2. read the file stream    (FileReadError / FileTooLargeError)
#   3. derive the object key   ({user_id}-{filename})
#   4. upload the object       (StorageUploadError, user untouched)
#   5. store the public URL    (PersistenceError / UpdateConflictError)
#
# Known limitation: if step 5 fails the object stays in the bucket.
# =============================================================================

import logging
from typing import BinaryIO

from app.exceptions import (
    FileReadError,
    FileTooLargeError,
    InvalidFilenameError,
    UploadAPIException,
)
from core.services.storage_service import PUBLIC_READ, StorageService
from core.services.user_service import UserService
from lib.utils import base_filename

logger = logging.getLogger(__name__)


def build_storage_key(user_id: str, filename: str) -> str:
    """
    Derive the object key for a user's upload.

    The same (user_id, filename) always maps to the same key, so re-uploading
    a file name overwrites the previous object.

    Example:
        build_storage_key("42", "avatar.png")  # "42-avatar.png"
    """
    return f"{user_id}-{filename}"


class UploadService:
    """
    Coordinates file intake, object upload and the user record update.

    Holds no per-request state; one instance serves all requests.
    """

    def __init__(
        self,
        users: UserService,
        storage: StorageService,
        bucket: str,
        max_upload_size_bytes: int,
    ):
        self.users = users
        self.storage = storage
        self.bucket = bucket
        self.max_upload_size_bytes = max_upload_size_bytes

    def read_file(self, stream: BinaryIO, filename: str, declared_size: int | None) -> bytes:
        """
        Read an upload stream completely into memory.

        With a declared size, exactly that many bytes are expected; one extra
        byte is requested so a stream longer than announced is caught. Without
        one, the stream is read to the end up to the configured maximum.

        Raises:
            FileReadError: Stream unreadable, negative declared size, size
                mismatch, or empty
            FileTooLargeError: More bytes than MAX_UPLOAD_SIZE_MB allows
        """
        limit = self.max_upload_size_bytes
        if declared_size is not None and declared_size < 0:
            raise FileReadError(filename, f"invalid declared size: {declared_size}")
        if declared_size is not None and declared_size > limit:
            raise FileTooLargeError(declared_size / (1024 * 1024), limit // (1024 * 1024))

        try:
            if declared_size is not None:
                data = stream.read(declared_size + 1)
            else:
                data = stream.read(limit + 1)
        except (OSError, ValueError) as e:
            raise FileReadError(filename, str(e))

        if declared_size is None and len(data) > limit:
            raise FileTooLargeError(len(data) / (1024 * 1024), limit // (1024 * 1024))
        if declared_size is not None and len(data) < declared_size:
            raise FileReadError(
                filename, f"stream ended after {len(data)} of {declared_size} bytes"
            )
        if declared_size is not None and len(data) > declared_size:
            raise FileReadError(
                filename, f"stream is longer than the declared {declared_size} bytes"
            )
        if not data:
            raise FileReadError(filename, "file is empty")

        return data

    def upload_profile_image(
        self,
        user_id: str,
        stream: BinaryIO,
        filename: str | None,
        declared_size: int | None,
        content_type: str | None = None,
    ) -> bool:
        """
        Upload a profile image and point the user's image_uri at it.

        Args:
            user_id: Owning user's id
            stream: Readable binary file object
            filename: Original client file name
            declared_size: Size announced by the client, in bytes
            content_type: MIME type forwarded to the object store

        Returns:
            True once the object is stored and the user record updated

        Raises:
            UserNotFoundError: Unknown user_id (storage is never touched)
            InvalidFilenameError: No usable file name
            FileReadError / FileTooLargeError: Stream problems
            StorageUploadError: Object store rejected or didn't answer
            PersistenceError / UpdateConflictError: Record update failed
        """
        user = self.users.find_by_field("id", user_id)

        name = base_filename(filename)
        if not name:
            raise InvalidFilenameError(filename)

        data = self.read_file(stream, name, declared_size)
        key = build_storage_key(user.id, name)

        self.storage.put(self.bucket, key, data, PUBLIC_READ, content_type)

        user.image_uri = self.storage.public_url(key, self.bucket)
        try:
            self.users.update(user)
        except UploadAPIException:
            logger.warning(f"Object {self.bucket}/{key} uploaded but user {user.id} was not updated")
            raise

        logger.info(f"Profile image for user {user.id} set to {user.image_uri}")
        return True
