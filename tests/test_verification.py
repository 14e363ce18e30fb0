"""
Tests for the verification registry.
"""

from pathlib import Path

import pytest

from sneaker_secure.core.config import VerificationConfig
from sneaker_secure.core.exceptions import ConfigurationError
from sneaker_secure.verification import VerificationRegistry

TRUSTED_ID = "d3b59a87-86f4-473a-8a96-78f5ccee853b"


class TestVerificationRegistry:
    """Membership checks."""

    def test_trusted_id(self) -> None:
        registry = VerificationRegistry([TRUSTED_ID])
        assert registry.is_verified(TRUSTED_ID) is True
        assert TRUSTED_ID in registry

    @pytest.mark.parametrize(
        "item_id", ["", None, 42, "invalid-uuid-format", TRUSTED_ID.upper(), TRUSTED_ID + " "]
    )
    def test_untrusted_ids(self, item_id) -> None:
        registry = VerificationRegistry([TRUSTED_ID])
        assert registry.is_verified(item_id) is False

    def test_deterministic(self) -> None:
        """Repeated lookups give the same answer."""
        registry = VerificationRegistry([TRUSTED_ID])
        results = {registry.is_verified(TRUSTED_ID) for _ in range(10)}
        assert results == {True}

    def test_blank_entries_ignored(self) -> None:
        registry = VerificationRegistry(["", "  ", " abc "])
        assert len(registry) == 1
        assert registry.is_verified("abc") is True


class TestFromConfig:
    """Building the registry from configuration."""

    def test_default_config_trusts_shipped_id(self) -> None:
        registry = VerificationRegistry.from_config(VerificationConfig())
        assert registry.is_verified(TRUSTED_ID) is True

    def test_text_file(self, temp_dir: Path) -> None:
        path = temp_dir / "ids.txt"
        path.write_text("# trusted ids\nabc\n\n  def  \n")
        registry = VerificationRegistry.from_config(
            VerificationConfig(trusted_ids=[], trusted_ids_file=path)
        )
        assert registry.trusted_ids == frozenset({"abc", "def"})

    def test_yaml_list_and_mapping(self, temp_dir: Path) -> None:
        list_path = temp_dir / "ids.yaml"
        list_path.write_text("- abc\n- def\n")
        map_path = temp_dir / "ids.yml"
        map_path.write_text("ids:\n  - ghi\n")

        assert len(VerificationRegistry.from_config(
            VerificationConfig(trusted_ids=[], trusted_ids_file=list_path)
        )) == 2
        assert VerificationRegistry.from_config(
            VerificationConfig(trusted_ids=["abc"], trusted_ids_file=map_path)
        ).trusted_ids == frozenset({"abc", "ghi"})

    def test_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(ConfigurationError):
            VerificationRegistry.from_config(
                VerificationConfig(trusted_ids_file=temp_dir / "missing.txt")
            )

    def test_yaml_scalar_rejected(self, temp_dir: Path) -> None:
        path = temp_dir / "ids.yaml"
        path.write_text("just-one-string\n")
        with pytest.raises(ConfigurationError):
            VerificationRegistry.from_config(VerificationConfig(trusted_ids_file=path))
