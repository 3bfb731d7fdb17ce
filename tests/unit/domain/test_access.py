"""Unit tests for access domain types"""

import pytest
from datetime import date
from src.domain.access import ADMIN_OR_PM, Principal, RoleRequirement
from src.domain.invoice import Invoice
from src.domain.template import ProjectTemplate
from src.domain.user import UserRole


class TestPrincipal:
    def test_super_admin_requires_admin_role(self):
        principal = Principal(user_id="u1", organization_id="o1", role=UserRole.PM, is_super_admin=True)
        assert principal.has_super_admin_access is False

    def test_super_admin_requires_flag(self):
        principal = Principal(user_id="u1", organization_id="o1", role=UserRole.ADMIN)
        assert principal.has_super_admin_access is False

    def test_super_admin(self):
        principal = Principal(user_id="u1", organization_id=None, role=UserRole.ADMIN, is_super_admin=True)
        assert principal.has_super_admin_access is True


class TestRoleRequirement:
    def test_of_builds_frozen_set(self):
        requirement = RoleRequirement.of(UserRole.ADMIN, UserRole.ADMIN)
        assert requirement.allowed_roles == frozenset({UserRole.ADMIN})

    def test_admin_or_pm(self):
        assert ADMIN_OR_PM.allowed_roles == frozenset({UserRole.ADMIN, UserRole.PM})


class TestDescriptors:
    def test_template_descriptor(self):
        template = ProjectTemplate(
            name="Launch",
            organization_id=None,
            created_by="u1",
            is_publicly_available=True,
        )
        descriptor = template.descriptor()

        assert descriptor.resource_type == "template"
        assert descriptor.resource_id == template.id
        assert descriptor.organization_id is None
        assert descriptor.owner_id == "u1"
        assert descriptor.is_publicly_available is True

    def test_invoice_descriptor_and_prefix(self):
        invoice = Invoice(
            organization_id="o1",
            invoice_number="ACME-2024-000007",
            client_name="Client",
            issue_date=date(2024, 1, 1),
            subtotal=0,
            tax_amount=0,
            total_amount=0,
            created_by="u1",
        )

        assert invoice.number_prefix == "ACME"
        descriptor = invoice.descriptor()
        assert descriptor.organization_id == "o1"
        assert descriptor.owner_id == "u1"
        assert descriptor.is_publicly_available is False

    @pytest.mark.parametrize(
        "invoice_number, expected_prefix",
        [
            ("INV-2024-000001", "INV"),
            ("ACME-EU-2024-000001", "ACME-EU"),
            ("ACME-EU-2024-123456", "ACME-EU"),
        ],
    )
    def test_invoice_prefix_keeps_inner_dashes(self, invoice_number, expected_prefix):
        """
        Given an invoice number whose prefix contains dashes
        When the prefix is derived for the next recurring number
        Then only the trailing year and sequence segments are dropped
        """
        invoice = Invoice(
            organization_id="o1",
            invoice_number=invoice_number,
            client_name="Client",
            issue_date=date(2024, 1, 1),
            subtotal=0,
            tax_amount=0,
            total_amount=0,
        )

        assert invoice.number_prefix == expected_prefix
