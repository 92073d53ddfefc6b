"""Tests for the upload policy engine."""

import itertools
from unittest.mock import Mock

import pytest

from bucketsync.errors import TransportError
from bucketsync.models.options import BehaviorOptions, UploadOptions
from bucketsync.models.report import Action
from bucketsync.services.policy import UploadPolicy
from tests.conftest import FakeStorage, remote

LONG_CACHE = UploadOptions({"Cache-Control": "max-age=31536000"})


class TestHtmlOverride:
    """HTML files are always uploaded uncached, whatever the flags say."""

    @pytest.mark.parametrize(
        "force,remove_old_version,same_name_skip",
        list(itertools.product([False, True], repeat=3)),
    )
    def test_all_flag_combinations(self, force, remove_old_version, same_name_skip) -> None:
        storage = FakeStorage([remote("index.html", 1), remote("index.html.bak", 0)])
        behavior = BehaviorOptions(force, remove_old_version, same_name_skip)
        policy = UploadPolicy(storage, behavior)

        decision = policy.decide("index.html", "/tmp/index.html", LONG_CACHE)

        assert decision.action is Action.UPLOAD
        assert decision.options.headers == {"Cache-Control": "no-cache"}
        assert storage.lists == []

    def test_html_upload_is_recorded(self) -> None:
        storage = FakeStorage([remote("index.html", 1)])
        policy = UploadPolicy(storage, BehaviorOptions(same_name_skip=True))

        outcome = policy.process("index.html", "/tmp/index.html")

        assert outcome.uploaded
        assert storage.puts[0][0] == "index.html"


class TestCacheControl:
    """Cache-Control is only kept for fingerprinted filenames."""

    def test_kept_for_fingerprinted_file(self) -> None:
        policy = UploadPolicy(FakeStorage(), BehaviorOptions(force=True))

        decision = policy.decide("app.a1b2c3.js", "/tmp/a.js", LONG_CACHE)

        assert decision.options.cache_control == "max-age=31536000"

    @pytest.mark.parametrize("key", ["robots.txt", "jquery.min.js", "LICENSE"])
    def test_stripped_without_fingerprint(self, key) -> None:
        policy = UploadPolicy(FakeStorage(), BehaviorOptions(force=True))

        decision = policy.decide(key, "/tmp/f", LONG_CACHE)

        assert decision.options.cache_control is None

    def test_strip_is_case_insensitive(self) -> None:
        policy = UploadPolicy(FakeStorage(), BehaviorOptions(force=True))
        options = UploadOptions({"cache-control": "max-age=60", "Content-Type": "text/plain"})

        decision = policy.decide("robots.txt", "/tmp/r", options)

        assert decision.options.headers == {"Content-Type": "text/plain"}

    def test_caller_options_not_mutated(self) -> None:
        policy = UploadPolicy(FakeStorage(), BehaviorOptions(force=True))
        options = UploadOptions({"Cache-Control": "max-age=60"})

        policy.process("robots.txt", "/tmp/r", options)

        assert options.headers == {"Cache-Control": "max-age=60"}


class TestForce:
    def test_force_uploads_without_listing(self) -> None:
        storage = FakeStorage([remote("app.a1b2c3.js")])
        policy = UploadPolicy(storage, BehaviorOptions(force=True, same_name_skip=True))

        outcome = policy.process("app.a1b2c3.js", "/tmp/a.js", LONG_CACHE)

        assert outcome.uploaded
        assert storage.lists == []
        assert storage.puts[0][2].cache_control == "max-age=31536000"


class TestSameNameSkip:
    def test_existing_key_is_skipped(self) -> None:
        storage = FakeStorage([remote("js/app.a1b2c3.js")])
        policy = UploadPolicy(storage, BehaviorOptions(same_name_skip=True))

        outcome = policy.process("js/app.a1b2c3.js", "/tmp/a.js")

        assert outcome.action is Action.SKIP
        assert not outcome.uploaded
        assert storage.puts == []
        assert storage.lists == ["js/app"]

    def test_new_version_is_uploaded(self) -> None:
        storage = FakeStorage([remote("js/app.000000.js")])
        policy = UploadPolicy(storage, BehaviorOptions(same_name_skip=True))

        outcome = policy.process("js/app.a1b2c3.js", "/tmp/a.js")

        assert outcome.uploaded

    def test_existing_key_uploaded_without_flag(self) -> None:
        storage = FakeStorage([remote("app.a1b2c3.js")])
        policy = UploadPolicy(storage, BehaviorOptions())

        assert policy.process("app.a1b2c3.js", "/tmp/a.js").uploaded

    def test_skip_wins_over_cleanup(self) -> None:
        storage = FakeStorage([remote("app.1.js", 0), remote("app.2.js", 1), remote("app.3.js", 2)])
        policy = UploadPolicy(storage, BehaviorOptions(remove_old_version=True, same_name_skip=True))

        outcome = policy.process("app.2.js", "/tmp/a.js")

        assert outcome.action is Action.SKIP
        assert storage.deletes == []


class TestRemoveOldVersion:
    def test_three_versions_keep_newest(self) -> None:
        storage = Mock()
        storage.list.return_value = [
            remote("js/app.111111.js", days=1),
            remote("js/app.333333.js", days=3),
            remote("js/app.222222.js", days=2),
        ]
        policy = UploadPolicy(storage, BehaviorOptions(remove_old_version=True))

        outcome = policy.process("js/app.444444.js", "/tmp/a.js")

        assert outcome.action is Action.REPLACE_THEN_UPLOAD
        assert storage.delete.call_count == 2
        assert [c.args[0] for c in storage.delete.call_args_list] == [
            "js/app.222222.js",
            "js/app.111111.js",
        ]
        assert outcome.deleted == ["js/app.222222.js", "js/app.111111.js"]
        storage.put.assert_called_once()

    def test_single_old_version_is_kept(self) -> None:
        storage = FakeStorage([remote("app.111111.js", 1)])
        policy = UploadPolicy(storage, BehaviorOptions(remove_old_version=True))

        outcome = policy.process("app.222222.js", "/tmp/a.js")

        assert outcome.action is Action.UPLOAD
        assert storage.deletes == []

    def test_only_same_prefix_and_extension_count(self) -> None:
        storage = FakeStorage([
            remote("app.111111.js", 1),
            remote("app.222222.css", 2),
            remote("app-admin.333333.js", 3),
            remote("app.444444.js", 4),
        ])
        policy = UploadPolicy(storage, BehaviorOptions(remove_old_version=True))

        outcome = policy.process("app.555555.js", "/tmp/a.js")

        assert outcome.deleted == ["app.111111.js"]
        assert "app.222222.css" in storage.objects
        assert "app-admin.333333.js" in storage.objects

    def test_decide_does_not_delete(self) -> None:
        storage = FakeStorage([remote("app.1.js", 1), remote("app.2.js", 2)])
        policy = UploadPolicy(storage, BehaviorOptions(remove_old_version=True))

        decision = policy.decide("app.3.js", "/tmp/a.js")

        assert decision.action is Action.REPLACE_THEN_UPLOAD
        assert len(decision.stale_versions) == 2
        assert storage.deletes == []
        assert storage.puts == []


class TestFailures:
    def test_put_failure_propagates(self) -> None:
        storage = Mock()
        storage.list.return_value = []
        storage.put.side_effect = TransportError("put", "app.1.js", "boom")
        policy = UploadPolicy(storage, BehaviorOptions())

        with pytest.raises(TransportError, match="put app.1.js failed"):
            policy.process("app.1.js", "/tmp/a.js")

    def test_list_failure_propagates(self) -> None:
        storage = Mock()
        storage.list.side_effect = TransportError("list", "app", "timeout")
        policy = UploadPolicy(storage, BehaviorOptions())

        with pytest.raises(TransportError):
            policy.process("app.1.js", "/tmp/a.js")
        storage.put.assert_not_called()

    def test_decisions_are_logged_to_injected_logger(self) -> None:
        log = Mock()
        policy = UploadPolicy(FakeStorage(), BehaviorOptions(force=True), log=log)

        policy.process("app.1.js", "/tmp/a.js")

        log.info.assert_called_with("Upload %s", "app.1.js")
