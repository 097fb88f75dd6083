# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Import the flat files of the file-backed board into the configured store.

Its ``users.json`` maps usernames to plaintext passwords; they are hashed on
the way in. Its ``posts.json`` is an oldest-first list of
``{name, message, timestamp}`` records.

Usage::

    python -m msgboard.scripts.import_legacy users.json posts.json
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from msgboard.application.services.credential_store import USERNAME_MAX_LENGTH
from msgboard.container import Container
from msgboard.domain.posts.entities import Post
from msgboard.domain.users.entities import User
from msgboard.domain.users.exceptions import DuplicateUsernameError
from msgboard.infrastructure.repositories.json_files import post_from_record
from msgboard.shared.config import load_config
from msgboard.shared.logging import logger, setup_logging
from msgboard.utils.fs import read_json


@dataclass(slots=True)
class ImportSummary:
    users_imported: int = 0
    users_skipped: int = 0
    posts_imported: int = 0
    posts_skipped: int = 0


def import_users(container: Container, records: dict[str, Any], summary: ImportSummary) -> None:
    hasher = container.password_hasher
    users = container.user_repository
    for username, password in records.items():
        if (
            not username.strip()
            or username != username.strip()
            or len(username) > USERNAME_MAX_LENGTH
            or not isinstance(password, str)
            or not password
        ):
            logger.warning(f"import: skipping malformed user record {username!r}")
            summary.users_skipped += 1
            continue
        try:
            users.add(
                User(
                    username=username,
                    password_hash=hasher.hash(password),
                    created_at=datetime.now(UTC),
                )
            )
        except DuplicateUsernameError:
            logger.info(f"import: user {username!r} already exists, skipped")
            summary.users_skipped += 1
            continue
        summary.users_imported += 1


def import_posts(container: Container, records: list[Any], summary: ImportSummary) -> None:
    posts = container.post_repository
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            summary.posts_skipped += 1
            continue
        legacy = post_from_record(record, index)
        text = legacy.content.strip()
        if not legacy.author or not text:
            summary.posts_skipped += 1
            continue
        # Target store assigns ids; timestamps come from the file.
        posts.append(Post(author=legacy.author, content=text, created_at=legacy.created_at))
        summary.posts_imported += 1


def _refuse_in_place(container: Container, users_file: Path, posts_file: Path) -> None:
    if container.backend != "json":
        return
    storage = container.config.storage
    for source, target in ((users_file, storage.users_file), (posts_file, storage.posts_file)):
        if source.resolve() == target.resolve():
            raise ValueError(
                f"{source} is the target store itself; move the legacy files out of DATA_DIR first"
            )


def run_import(container: Container, users_file: Path, posts_file: Path) -> ImportSummary:
    _refuse_in_place(container, users_file, posts_file)
    summary = ImportSummary()
    container.init_storage()

    users = read_json(users_file, {})
    if not isinstance(users, dict):
        raise ValueError(f"{users_file} must hold a JSON object")
    posts = read_json(posts_file, [])
    if not isinstance(posts, list):
        raise ValueError(f"{posts_file} must hold a JSON array")

    import_users(container, users, summary)
    import_posts(container, posts, summary)
    return summary


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Import users.json/posts.json of the file-backed board into the configured store"
    )
    parser.add_argument("users_file", type=Path, help="Legacy users.json (missing file = no users)")
    parser.add_argument("posts_file", type=Path, help="Legacy posts.json (missing file = no posts)")
    args = parser.parse_args(argv)

    config = load_config()
    setup_logging(config.log_level, config.log_file)
    try:
        summary = run_import(Container(config), args.users_file, args.posts_file)
    except ValueError as exc:
        parser.error(str(exc))

    print(
        f"users: {summary.users_imported} imported, {summary.users_skipped} skipped; "
        f"posts: {summary.posts_imported} imported, {summary.posts_skipped} skipped"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
