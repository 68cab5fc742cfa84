"""
Tests for exclusion rules.
"""

from unittest import TestCase

from ddt import data, ddt, unpack
from po_translation_generator.utils.exclusions import (
    ExclusionSet,
    excluded_translation,
    format_product_name,
    is_excluded,
    parse_excluded_terms,
    product_name_from_file_name,
)


@ddt
class TestExclusions(TestCase):
    """
    Test which texts pass through untranslated.
    """

    def setUp(self):
        super().setUp()
        self.exclusions = ExclusionSet("Acme Forms", ["WordPress"])

    @data(
        ("Acme Forms", True),
        ("acme forms", True),
        ("wordpress", True),
        ("A", True),
        ("é", True),
        ("1", False),
        ("https://example.com", True),
        ("example.com/path?x=1#top", True),
        ("http://192.168.0.1:8080/admin", True),
        ("localhost", False),
        ("%s", True),
        ("%1$s %2$s", True),
        ("%d", True),
        ("%s items", False),
        ("Hello world", False),
        ("Save", False),
        ("", False),
    )
    @unpack
    def test_is_excluded(self, text, expected):
        """
        Test excluded terms, single letters, URLs and bare placeholders.
        """
        assert is_excluded(text, self.exclusions) is expected

    @data(
        ("acme forms", "Acme Forms"),
        ("ACME FORMS", "Acme Forms"),
        ("WordPress", "WordPress"),
        ("wordpress", "wordpress"),
        ("https://acme.test", "https://acme.test"),
    )
    @unpack
    def test_excluded_translation(self, text, expected):
        """
        Test only the product name is rewritten to its canonical casing.
        """
        assert excluded_translation(text, self.exclusions) == expected

    def test_exclusion_set_contents(self):
        """
        Test the set is keyed by lowercased terms and holds the product name.
        """
        assert set(self.exclusions) == {"acme forms", "wordpress"}
        assert self.exclusions["wordpress"] == "WordPress"
        assert self.exclusions.product_name == "Acme Forms"
        assert len(ExclusionSet("Acme")) == 1

    def test_exclusion_set_for_file(self):
        """
        Test the product name is derived from the catalog file name.
        """
        exclusions = ExclusionSet.for_file("acme-forms-fr_FR.po", ["Stripe"])

        assert exclusions.product_name == "Acme Forms"
        assert dict(exclusions) == {"stripe": "Stripe", "acme forms": "Acme Forms"}

    @data(
        ("my-plugin", "My Plugin"),
        ("acme", "Acme"),
        ("woo-commerce-pdf", "Woo Commerce Pdf"),
    )
    @unpack
    def test_format_product_name(self, slug, expected):
        """
        Test slugs are turned into display names.
        """
        assert format_product_name(slug) == expected

    @data(
        "acme-forms.pot",
        "acme-forms.po",
        "acme-forms-fr_FR.po",
        "acme-forms_FR_fr.po",
        "/tmp/l10n/acme-forms.pot",
        "acme-forms",
    )
    def test_product_name_from_file_name(self, file_name):
        """
        Test the extension and a locale suffix are ignored.
        """
        assert product_name_from_file_name(file_name) == "Acme Forms"

    @data(
        ("Acme, WordPress ,, Acme", ["Acme", "WordPress"]),
        (["Stripe", " PayPal "], ["Stripe", "PayPal"]),
        ("", []),
        (None, []),
    )
    @unpack
    def test_parse_excluded_terms(self, value, expected):
        """
        Test term lists are split, stripped and deduplicated.
        """
        assert parse_excluded_terms(value) == expected
