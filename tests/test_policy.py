#!/usr/bin/env python3
"""
Tests for parser policies.

This module tests policy validation and loading policies from JSON and YAML
files.
"""

import json
import os
import tempfile
import textwrap

import pytest

from typed_argparser import DeclarationError, Policy, load_policy


def _write_temp(content: str, suffix: str) -> str:
    with tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False) as f:
        f.write(content)
        return f.name


class TestPolicyValidation:
    """Test suite for policy construction."""

    def test_defaults(self):
        policy = Policy()
        assert policy.long_prefix == "--"
        assert policy.short_prefix == "-"
        assert policy.assign_delim == "="
        assert policy.separator_delim == ","

    def test_custom_policy(self):
        policy = Policy(long_prefix="++", short_prefix="+", assign_delim=":")
        assert policy.long_prefix == "++"
        assert policy.assign_delim == ":"

    def test_equal_prefixes_are_rejected(self):
        with pytest.raises(DeclarationError) as exc:
            Policy(long_prefix="-", short_prefix="-")
        assert "prefixes must differ" in str(exc.value)

    def test_empty_prefix_is_rejected(self):
        with pytest.raises(DeclarationError):
            Policy(short_prefix="")

    def test_equal_delimiters_are_rejected(self):
        with pytest.raises(DeclarationError) as exc:
            Policy(assign_delim=",", separator_delim=",")
        assert "delimiters must differ" in str(exc.value)

    @pytest.mark.parametrize("delim", ["", "=="])
    def test_delimiters_must_be_single_characters(self, delim):
        with pytest.raises(DeclarationError):
            Policy(assign_delim=delim)

    def test_declaration_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            Policy(long_prefix="/", short_prefix="/")

    def test_policy_is_immutable(self):
        policy = Policy()
        with pytest.raises(AttributeError):
            policy.long_prefix = "//"


class TestPolicyFromMapping:
    """Test suite for building policies from plain data."""

    def test_partial_mapping_keeps_defaults(self):
        policy = Policy.from_mapping({"assign_delim": ":"})
        assert policy == Policy(assign_delim=":")

    def test_unknown_keys_are_rejected(self):
        with pytest.raises(ValueError) as exc:
            Policy.from_mapping({"long": "--", "short": "-"})
        assert "Unknown policy keys: long, short" in str(exc.value)

    def test_non_string_values_are_rejected(self):
        with pytest.raises(ValueError) as exc:
            Policy.from_mapping({"assign_delim": 1})
        assert "expects str" in str(exc.value)


class TestLoadPolicy:
    """Test suite for loading policies from files."""

    def test_json_policy(self):
        config_path = _write_temp(
            json.dumps({"long_prefix": "++", "short_prefix": "+"}), ".json"
        )
        try:
            policy = load_policy(config_path)
            assert policy == Policy(long_prefix="++", short_prefix="+")
        finally:
            os.unlink(config_path)

    @pytest.mark.parametrize("suffix", [".yaml", ".yml"])
    def test_yaml_policy(self, suffix):
        config_content = textwrap.dedent("""
            long_prefix: "//"
            short_prefix: "/"
            assign_delim: ":"
            separator_delim: ";"
            """).strip()
        config_path = _write_temp(config_content, suffix)
        try:
            policy = load_policy(config_path)
            assert policy.long_prefix == "//"
            assert policy.short_prefix == "/"
            assert policy.assign_delim == ":"
            assert policy.separator_delim == ";"
        finally:
            os.unlink(config_path)

    def test_empty_yaml_gives_default_policy(self):
        config_path = _write_temp("", ".yaml")
        try:
            assert load_policy(config_path) == Policy()
        finally:
            os.unlink(config_path)

    def test_invalid_policy_in_file(self):
        config_path = _write_temp(
            json.dumps({"long_prefix": "-", "short_prefix": "-"}), ".json"
        )
        try:
            with pytest.raises(DeclarationError):
                load_policy(config_path)
        finally:
            os.unlink(config_path)

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            load_policy("/nonexistent/policy.yaml")

    def test_unsupported_format(self):
        config_path = _write_temp("long_prefix = '--'", ".toml")
        try:
            with pytest.raises(ValueError) as exc:
                load_policy(config_path)
            assert "expected one of .json, .yaml, .yml" in str(exc.value)
        finally:
            os.unlink(config_path)

    def test_invalid_json(self):
        config_path = _write_temp("{not json", ".json")
        try:
            with pytest.raises(ValueError) as exc:
                load_policy(config_path)
            assert "policy is not valid JSON" in str(exc.value)
        finally:
            os.unlink(config_path)

    def test_invalid_yaml(self):
        config_path = _write_temp("long_prefix: [unclosed", ".yaml")
        try:
            with pytest.raises(ValueError) as exc:
                load_policy(config_path)
            assert "policy is not valid YAML" in str(exc.value)
        finally:
            os.unlink(config_path)

    def test_file_must_hold_a_mapping(self):
        config_path = _write_temp("- '--'\n- '-'\n", ".yaml")
        try:
            with pytest.raises(ValueError) as exc:
                load_policy(config_path)
            assert "policy file must contain a mapping" in str(exc.value)
        finally:
            os.unlink(config_path)
