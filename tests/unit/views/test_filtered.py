"""Tests for filtered views and the view set."""

import pytest

from archview.config import ViewsConfig
from archview.errors import DuplicateIDError
from archview.model import ModelBuilder
from archview.views import FilterMode, ViewKind, ViewSet, add_all, add_elements, materialize_filtered


@pytest.fixture
def landscape():
    builder = ModelBuilder()
    customer = builder.person("Customer", tags="External")
    banking = builder.software_system("Internet Banking")
    email = builder.software_system("E-mail", tags="External")
    builder.uses(customer, banking, tags="Web")
    builder.uses(email, customer)
    model = builder.finalize()

    views = ViewSet(model)
    base = views.landscape_view("landscape")
    add_all(base)
    return views, base, customer, banking, email


class TestFilteredViews:
    """Test tag based projection of a base view."""

    def test_include_mode(self, landscape):
        views, base, customer, banking, email = landscape
        view = views.filtered_view("landscape", "external", tags="External")

        materialize_filtered(view, base)

        assert view.filter_mode == FilterMode.INCLUDE
        assert view.element_ids == [customer.id, email.id]
        # Relationships need a matching tag, not just both endpoints.
        assert view.relationship_ids == []

    def test_include_relationships_by_tag(self, landscape):
        views, base, customer, banking, email = landscape
        view = views.filtered_view("landscape", "web", tags=["Element", "Web"])

        materialize_filtered(view, base)

        assert len(view.relationship_ids) == 1
        assert view.relationship_views[0].relationship.destination is banking

    def test_exclude_mode(self, landscape):
        views, base, customer, banking, email = landscape
        view = views.filtered_view("landscape", "internal", tags="External", exclude=True)

        materialize_filtered(view, base)

        assert view.element_ids == [banking.id]
        assert view.relationship_ids == []

    def test_base_must_be_static(self, landscape):
        views, base, customer, banking, email = landscape
        dynamic = views.dynamic_view("flow")
        view = views.filtered_view("flow", "filtered", tags="External")

        with pytest.raises(ValueError):
            materialize_filtered(view, dynamic)

    def test_materialize_all(self, landscape):
        views, base, customer, banking, email = landscape
        views.filtered_view("landscape", "external", tags="External")

        views.materialize_filtered_views()

        assert views.get("external").element_ids == [customer.id, email.id]

    def test_missing_base_view(self, landscape):
        views = landscape[0]
        views.filtered_view("nope", "broken", tags="External")

        with pytest.raises(ValueError):
            views.materialize_filtered_views()


class TestViewSet:
    """Test view creation through the view set."""

    def test_duplicate_key(self, landscape):
        views = landscape[0]

        with pytest.raises(DuplicateIDError):
            views.landscape_view("landscape")

    def test_context_view_adds_its_system(self, landscape):
        views, base, customer, banking, email = landscape

        view = views.context_view(banking, "context")

        assert view.element_ids == [banking.id]
        assert view.scope is banking

    def test_context_system_not_added_when_disabled(self, landscape):
        views, base, customer, banking, email = landscape
        quiet = ViewSet(views.model, ViewsConfig(auto_add_context_system=False))

        view = quiet.context_view(banking, "context")

        assert view.element_ids == []

    def test_auto_complete_from_config(self, landscape):
        views, base, customer, banking, email = landscape
        manual = ViewSet(views.model, ViewsConfig(autoCompleteRelationships=False))
        view = manual.landscape_view("manual")

        add_elements(view, customer, banking)

        assert view.relationship_ids == []

    def test_scope_kind_checked(self, landscape):
        views, base, customer, banking, email = landscape

        with pytest.raises(ValueError):
            views.context_view(customer, "context")
        with pytest.raises(ValueError):
            views.component_view(banking, "components")

    def test_of_kind_and_iteration(self, landscape):
        views, base, customer, banking, email = landscape
        views.context_view(banking, "context")
        views.deployment_view("live", environment="Live")

        assert [v.key for v in views] == ["landscape", "context", "live"]
        assert views.of_kind(ViewKind.DEPLOYMENT)[0].environment == "Live"
        assert len(views) == 3
