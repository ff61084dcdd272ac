"""Tests for tag based style cascading."""

import pytest

from archview.model import ModelBuilder
from archview.styles import (
    BorderKind,
    ElementStyle,
    RelationshipStyle,
    RoutingKind,
    ShapeKind,
    Styles,
    cascade,
)


class TestCascade:
    """Test field level merging of matching rules."""

    def test_fields_from_different_rules_combine(self):
        rules = [ElementStyle(tag="X", color="red"), ElementStyle(tag="Y", stroke="blue")]

        style = cascade(["X", "Y"], rules, ElementStyle)

        assert style.color == "red"
        assert style.stroke == "blue"
        assert style.background is None

    def test_later_rule_overrides_per_field(self):
        rules = [
            ElementStyle(tag="Element", color="black", shape=ShapeKind.BOX),
            ElementStyle(tag="Database", shape=ShapeKind.CYLINDER),
        ]

        style = cascade(["Element", "Database"], rules, ElementStyle)

        assert style.shape == ShapeKind.CYLINDER
        assert style.color == "black"

    def test_unset_field_never_overrides(self):
        rules = [ElementStyle(tag="A", opacity=40), ElementStyle(tag="B", opacity=None, border=BorderKind.DASHED)]

        style = cascade(["A", "B"], rules, ElementStyle)

        assert style.opacity == 40
        assert style.border == BorderKind.DASHED

    def test_false_is_a_set_value(self):
        rules = [RelationshipStyle(tag="A", dashed=True), RelationshipStyle(tag="B", dashed=False)]

        style = cascade(["A", "B"], rules, RelationshipStyle)

        assert style.dashed is False

    def test_non_matching_rules_ignored(self):
        rules = [ElementStyle(tag="Other", color="red")]

        style = cascade(["Element"], rules, ElementStyle)

        assert style == ElementStyle()

    def test_opacity_range_checked(self):
        with pytest.raises(ValueError):
            ElementStyle(tag="X", opacity=101)
        with pytest.raises(ValueError):
            RelationshipStyle(tag="X", opacity=-1)


class TestStyles:
    """Test workspace style rules against finalized elements."""

    def test_default_tags_participate(self):
        builder = ModelBuilder()
        customer = builder.person("Customer", tags="External")
        system = builder.software_system("Internet Banking")
        rel = builder.uses(customer, system)
        builder.finalize()

        styles = Styles()
        styles.add_element_style("Element", color="#ffffff")
        styles.add_element_style("Person", shape=ShapeKind.PERSON)
        styles.add_element_style("External", background="#999999")
        styles.add_relationship_style("Relationship", routing=RoutingKind.ORTHOGONAL, thickness=2)

        person_style = styles.element_style(customer)
        system_style = styles.element_style(system)
        rel_style = styles.relationship_style(rel)

        assert person_style.color == "#ffffff"
        assert person_style.shape == ShapeKind.PERSON
        assert person_style.background == "#999999"
        assert system_style.shape is None
        assert system_style.color == "#ffffff"
        assert rel_style.routing == RoutingKind.ORTHOGONAL
        assert rel_style.thickness == 2
