# tests/50_core/test_get_metadata.py
"""Verify get_metadata() works from an installed package or a source checkout."""

import autoimporter.actions as mod_actions
import autoimporter.meta as mod_meta


MIN_VERSION_PARTS = 2


def test_get_metadata_returns_tuple() -> None:
    """Should return a Metadata tuple with version and commit."""
    # --- execute ---
    metadata = mod_actions.get_metadata()

    # --- verify ---
    assert isinstance(metadata, mod_meta.Metadata)
    assert isinstance(metadata.version, str)
    assert len(metadata.version) > 0
    assert isinstance(metadata.commit, str)
    assert len(metadata.commit) > 0


def test_get_metadata_version_format() -> None:
    """Should return a version in expected format."""
    metadata = mod_actions.get_metadata()

    if metadata.version != "unknown":
        parts = metadata.version.split(".")
        msg = f"Version should have at least major.minor: {metadata.version}"
        assert len(parts) >= MIN_VERSION_PARTS, msg


def test_metadata_str() -> None:
    assert str(mod_meta.Metadata("1.2.3", "abc1234")) == "1.2.3 (abc1234)"
