"""Unit tests for FailureClassifier."""

import pytest

from openvas_installer.classifier import FailureClassifier, FailureKind


@pytest.mark.unit
class TestFailureClassifier:

    @pytest.mark.parametrize("text", [
        "SELinux must be disabled",
        "ERROR: selinux must be disabled, not permissive\n",
        "line one\nSELINUX MUST BE DISABLED\nline three",
    ])
    def test_detects_selinux_requirement_any_case(self, text):
        assert FailureClassifier().classify(text) == FailureKind.SECURITY_MODULE_MUST_BE_DISABLED

    @pytest.mark.parametrize("text", [
        "",
        "could not connect to redis socket",
        "SELinux is permissive",
    ])
    def test_unrelated_text_is_other_failure(self, text):
        assert FailureClassifier().classify(text) == FailureKind.OTHER_FAILURE

    def test_patterns_are_configurable(self):
        classifier = FailureClassifier(["mandatory access control .* off"])

        assert classifier.classify("Mandatory Access Control must be OFF") == FailureKind.SECURITY_MODULE_MUST_BE_DISABLED
        assert classifier.classify("SELinux must be disabled") == FailureKind.OTHER_FAILURE

    def test_requires_a_pattern(self):
        with pytest.raises(ValueError):
            FailureClassifier([])
