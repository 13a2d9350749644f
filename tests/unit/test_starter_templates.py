"""
Unit tests for domain/services/starter_templates.py
"""

from datetime import date

import pytest

from domain.models import ArtifactType, BlockFlow
from domain.services.starter_templates import (
    SCRATCH,
    default_artifact_name,
    is_known_template,
    starter_blocks,
    templates_for,
)


@pytest.mark.unit
class TestStarterTemplates:

    def test_templates_grouped_by_type(self):
        assert {t.id for t in templates_for(ArtifactType.SINGLE)} == {"strength", "circuit", "emom"}
        assert {t.id for t in templates_for(ArtifactType.WEEKLY)} == {"full-week", "strength-week"}
        assert {t.id for t in templates_for(ArtifactType.MONTHLY)} == {"periodized"}

    def test_known_templates(self):
        assert is_known_template(SCRATCH)
        assert is_known_template("strength")
        assert not is_known_template("yoga")

    def test_strength_blocks(self):
        blocks = starter_blocks("strength")
        assert [b.name for b in blocks] == ["Dynamic Warm-up", "Strength Training", "Cool-down"]
        assert [b.rest_between_exercises for b in blocks] == [60, 90, 30]

    def test_circuit_blocks(self):
        circuit = starter_blocks("circuit")[1]
        assert circuit.flow is BlockFlow.CIRCUIT
        assert circuit.rounds == 3

    def test_blocks_get_fresh_ids_each_call(self):
        first = {b.id for b in starter_blocks("strength")}
        second = {b.id for b in starter_blocks("strength")}
        assert not first & second

    def test_templates_without_blocks(self):
        assert starter_blocks("emom") == []
        assert starter_blocks(SCRATCH) == []


@pytest.mark.unit
class TestDefaultArtifactName:

    def test_scratch_name(self):
        name = default_artifact_name(SCRATCH, ArtifactType.WEEKLY, date(2024, 3, 4))
        assert name == "Custom Weekly - 2024-03-04"

    def test_template_name(self):
        name = default_artifact_name("strength", ArtifactType.SINGLE, date(2024, 3, 4))
        assert name == "Classic Strength Single - 2024-03-04"
