"""Tests for view membership rules."""

import pytest

from archview.errors import TypeMismatchError, ViewMembershipViolationError
from archview.model import ModelBuilder
from archview.views import (
    ElementView,
    ViewSet,
    add_all,
    add_elements,
    add_interaction,
    add_neighbors,
    add_relationships,
    check_membership,
    remove,
    remove_tagged,
    remove_unreachable,
    remove_unrelated,
)


class BankModel:
    """Small internet banking model shared by the membership tests."""

    def __init__(self):
        builder = ModelBuilder()
        self.customer = builder.person("Customer")
        self.clerk = builder.person("Clerk", tags="Staff")
        self.banking = builder.software_system("Internet Banking")
        self.mainframe = builder.software_system("Mainframe")
        self.email = builder.software_system("E-mail", tags="External")
        self.web = builder.container(self.banking, "Web")
        self.api = builder.container(self.banking, "API")
        self.db = builder.container(self.banking, "Database")
        self.signin = builder.component(self.api, "Sign In")
        self.accounts = builder.component(self.api, "Accounts")

        self.uses_banking = builder.uses(self.customer, self.banking, "Views balances")
        self.uses_mainframe = builder.uses(self.banking, self.mainframe, "Gets accounts", tags="Legacy")
        self.sends_email = builder.uses(self.email, self.customer, "Sends e-mails")
        self.uses_web = builder.uses(self.customer, self.web, "Visits")
        self.web_api = builder.uses(self.web, self.api, "Calls")
        self.api_db = builder.uses(self.api, self.db, "Reads")
        self.api_mainframe = builder.uses(self.api, self.mainframe, "Calls")
        self.signin_accounts = builder.uses(self.signin, self.accounts, "Uses")
        self.web_signin = builder.uses(self.web, self.signin, "Signs in")
        self.model = builder.finalize()
        self.views = ViewSet(self.model)


@pytest.fixture
def bank():
    return BankModel()


def assert_endpoints_present(view):
    for rv in view.relationship_views:
        assert view.has_element(rv.source_id)
        assert view.has_element(rv.destination_id)


class TestAddElements:
    """Test kind checks and relationship completion when adding elements."""

    def test_landscape_rejects_container(self, bank):
        view = bank.views.landscape_view("landscape")

        with pytest.raises(TypeMismatchError) as exc_info:
            add_elements(view, bank.customer, bank.web)

        assert exc_info.value.element is bank.web
        assert view.element_ids == []

    def test_container_view_accepts_containers(self, bank):
        view = bank.views.container_view(bank.banking, "containers")

        add_elements(view, bank.customer, bank.web, bank.api)

        assert view.element_ids == [bank.customer.id, bank.web.id, bank.api.id]
        assert view.relationship_ids == [bank.uses_web.id, bank.web_api.id]

    def test_container_view_rejects_component(self, bank):
        view = bank.views.container_view(bank.banking, "containers")

        with pytest.raises(TypeMismatchError):
            add_elements(view, bank.signin)

    def test_deployment_view_rejects_people(self, bank):
        view = bank.views.deployment_view("live")

        with pytest.raises(TypeMismatchError):
            add_elements(view, bank.customer)

    def test_already_present_elements_ignored(self, bank):
        view = bank.views.landscape_view("landscape")
        add_elements(view, bank.customer)

        add_elements(view, bank.customer, bank.banking)

        assert view.element_ids == [bank.customer.id, bank.banking.id]

    def test_completion_happens_when_second_endpoint_arrives(self, bank):
        view = bank.views.landscape_view("landscape")

        add_elements(view, bank.customer)
        assert view.relationship_ids == []

        add_elements(view, bank.banking)
        assert view.relationship_ids == [bank.uses_banking.id]

    def test_completion_is_not_recomputed_for_existing_elements(self, bank):
        view = bank.views.landscape_view("landscape")
        add_elements(view, bank.customer, bank.banking)
        view.relationship_views.clear()

        add_elements(view, bank.mainframe)

        assert view.relationship_ids == [bank.uses_mainframe.id]
        assert add_relationships(view, *bank.model.relationships) == 1
        assert set(view.relationship_ids) == {bank.uses_banking.id, bank.uses_mainframe.id}

    def test_no_completion_when_disabled(self, bank):
        view = bank.views.landscape_view("landscape")
        view.auto_complete = False

        add_elements(view, bank.customer, bank.banking)

        assert view.relationship_ids == []


class TestAddRelationships:
    """Test relationship filtering and idempotence."""

    def test_skips_missing_endpoints(self, bank):
        view = bank.views.landscape_view("landscape")
        view.auto_complete = False
        add_elements(view, bank.customer, bank.banking)

        added = add_relationships(view, bank.uses_banking, bank.uses_mainframe)

        assert added == 1
        assert view.relationship_ids == [bank.uses_banking.id]

    def test_idempotent(self, bank):
        view = bank.views.landscape_view("landscape")
        add_all(view)
        before = list(view.relationship_ids)

        assert add_relationships(view, *bank.model.relationships) == 0
        assert add_relationships(view, *bank.model.relationships) == 0
        assert view.relationship_ids == before


class TestRemove:
    """Test element removal and scope protection."""

    def test_removes_touching_relationships(self, bank):
        view = bank.views.landscape_view("landscape")
        add_all(view)

        assert remove(view, bank.customer.id) is True

        assert not view.has_element(bank.customer.id)
        assert all(not rv.relationship.touches(bank.customer.id) for rv in view.relationship_views)
        assert view.relationship_ids == [bank.uses_mainframe.id]
        assert_endpoints_present(view)

    def test_remove_absent_element(self, bank):
        view = bank.views.landscape_view("landscape")

        assert remove(view, bank.customer.id) is False

    def test_context_view_keeps_its_system(self, bank):
        view = bank.views.context_view(bank.banking, "context")
        add_elements(view, bank.customer)

        assert remove(view, bank.banking.id) is False
        assert view.has_element(bank.banking.id)
        assert remove(view, bank.customer.id) is True

    def test_container_view_keeps_its_system(self, bank):
        view = bank.views.container_view(bank.banking, "containers")
        add_elements(view, bank.banking, bank.web)

        assert remove(view, bank.banking.id) is False
        assert view.has_element(bank.banking.id)

    def test_component_view_keeps_container_and_system(self, bank):
        view = bank.views.component_view(bank.api, "components")
        add_elements(view, bank.banking, bank.api, bank.signin)

        assert remove(view, bank.api.id) is False
        assert remove(view, bank.banking.id) is False
        assert remove(view, bank.signin.id) is True
        assert view.element_ids == [bank.banking.id, bank.api.id]


class TestBulkHelpers:
    """Test add_all, add_neighbors and the remove_* helpers."""

    def test_add_all_landscape(self, bank):
        view = bank.views.landscape_view("landscape")

        add_all(view)

        assert view.element_ids == [
            bank.customer.id, bank.clerk.id, bank.banking.id, bank.mainframe.id, bank.email.id,
        ]
        assert view.relationship_ids == [
            bank.uses_banking.id, bank.uses_mainframe.id, bank.sends_email.id,
        ]

    def test_add_all_container_view_limits_to_scope(self, bank):
        view = bank.views.container_view(bank.banking, "containers")

        add_all(view)

        assert bank.web.id in view.element_ids
        assert bank.db.id in view.element_ids
        assert bank.banking.id not in view.element_ids
        assert_endpoints_present(view)

    def test_add_all_component_view_limits_to_scope(self, bank):
        view = bank.views.component_view(bank.api, "components")

        add_all(view)

        assert bank.signin.id in view.element_ids
        assert bank.accounts.id in view.element_ids
        assert bank.api.id not in view.element_ids
        assert bank.web.id in view.element_ids

    def test_add_all_not_supported_for_dynamic(self, bank):
        view = bank.views.dynamic_view("signin")

        with pytest.raises(ValueError):
            add_all(view)

    def test_add_neighbors(self, bank):
        view = bank.views.landscape_view("landscape")

        add_neighbors(view, bank.customer)

        assert view.element_ids == [bank.customer.id, bank.banking.id, bank.email.id]

    def test_add_neighbors_filters_inadmissible_kinds(self, bank):
        view = bank.views.context_view(bank.banking, "context")

        add_neighbors(view, bank.customer)

        assert bank.web.id not in view.element_ids

    def test_remove_tagged(self, bank):
        view = bank.views.landscape_view("landscape")
        add_all(view)

        remove_tagged(view, "External")
        remove_tagged(view, "Legacy")

        assert not view.has_element(bank.email.id)
        assert view.relationship_ids == [bank.uses_banking.id]
        assert view.has_element(bank.mainframe.id)

    def test_remove_unreachable(self, bank):
        view = bank.views.landscape_view("landscape")
        add_all(view)

        remove_unreachable(view, bank.email)

        # The clerk has no relationship to anything in the landscape graph.
        assert not view.has_element(bank.clerk.id)
        assert view.has_element(bank.mainframe.id)

    def test_remove_unrelated(self, bank):
        view = bank.views.landscape_view("landscape")
        add_all(view)

        remove_unrelated(view)

        assert not view.has_element(bank.clerk.id)
        assert len(view.element_ids) == 4


class TestInteractions:
    """Test numbered interactions in dynamic views."""

    def test_orders_interactions(self, bank):
        view = bank.views.dynamic_view("signin", scope=bank.api)

        first = add_interaction(view, bank.web, bank.signin, "Submits credentials")
        second = add_interaction(view, bank.signin, bank.accounts)

        assert (first.order, second.order) == ("1", "2")
        assert first.description == "Submits credentials"
        assert view.element_ids == [bank.web.id, bank.signin.id, bank.accounts.id]
        assert view.relationship_ids == [bank.web_signin.id, bank.signin_accounts.id]

    def test_removal_renumbers_interactions(self, bank):
        view = bank.views.dynamic_view("signin")
        add_interaction(view, bank.customer, bank.web)
        add_interaction(view, bank.web, bank.signin)
        add_interaction(view, bank.signin, bank.accounts)

        remove(view, bank.customer.id)
        latest = add_interaction(view, bank.web, bank.api)

        assert [rv.order for rv in view.relationship_views] == ["1", "2", "3"]
        assert view.relationship_ids == [bank.web_signin.id, bank.signin_accounts.id, bank.web_api.id]
        assert latest.order == "3"

    def test_dynamic_view_does_not_complete_relationships(self, bank):
        view = bank.views.dynamic_view("signin")

        add_elements(view, bank.web, bank.signin)

        assert view.relationship_ids == []

    def test_requires_relationship(self, bank):
        view = bank.views.dynamic_view("signin")

        with pytest.raises(ValueError):
            add_interaction(view, bank.accounts, bank.signin)

    def test_requires_dynamic_view(self, bank):
        view = bank.views.landscape_view("landscape")

        with pytest.raises(ValueError):
            add_interaction(view, bank.customer, bank.banking)


class TestCheckMembership:
    """Test membership validation of views populated directly."""

    def test_reports_inadmissible_elements(self, bank):
        view = bank.views.context_view(bank.banking, "context")
        view.element_views.append(ElementView(element=bank.web))

        errors = check_membership(view)

        assert len(errors) == 1
        assert isinstance(errors[0], ViewMembershipViolationError)
        assert "'Web'" in str(errors[0])

    def test_clean_view(self, bank):
        view = bank.views.landscape_view("landscape")
        add_all(view)

        assert check_membership(view) == []
