"""Tests for person name and street name derivations."""

from afas_update.domain.services.conversions import convert_name_fields, convert_street_name


class TestConvertNameFields:
    def test_prefix_initials_and_search_name(self):
        """Prefix, initials and search name are derived from the names."""
        result = convert_name_fields({"FiNm": "Jan Piet", "LaNm": "van der Berg"})

        assert result["Is"] == "van der"
        assert result["LaNm"] == "Berg"
        assert result["In"] == "J.P."
        assert result["SeNm"] == "BERG"
        assert result["FiNm"] == "Jan Piet"

    def test_input_is_not_modified(self):
        """A new mapping is returned."""
        fields = {"LaNm": "de Vries"}
        result = convert_name_fields(fields)
        assert fields == {"LaNm": "de Vries"}
        assert result["Is"] == "de"

    def test_initials_given_as_first_name(self):
        """A dotted first name without spaces is moved to the initials."""
        result = convert_name_fields({"FiNm": "J.P.", "LaNm": "Jansen"})
        assert result["In"] == "J.P."
        assert "FiNm" not in result

    def test_single_letter_first_name(self):
        """A single letter becomes an initial."""
        result = convert_name_fields({"FiNm": "j", "LaNm": "Jansen"})
        assert result["In"] == "J."
        assert "FiNm" not in result

    def test_existing_values_are_kept(self):
        """Targets that already hold a value are not overwritten."""
        result = convert_name_fields(
            {"FiNm": "Jan", "In": "J.W.", "LaNm": "van Dam", "Is": "", "SeNm": "DAMMETJE"}
        )
        assert result["In"] == "J.W."
        assert result["Is"] == "van"
        assert result["LaNm"] == "Dam"
        assert result["SeNm"] == "DAMMETJE"

    def test_search_name_is_truncated(self):
        """The search name is at most 10 characters."""
        result = convert_name_fields({"LaNm": "Vermeulen-Achterberg"})
        assert result["SeNm"] == "VERMEULEN-"


class TestConvertStreetName:
    def test_house_number_split_from_street(self):
        """Number and extension are split off the street."""
        result = convert_street_name({"Ad": "Kerkstraat 12 a", "CoId": "NL"})
        assert result["Ad"] == "Kerkstraat"
        assert result["HmNr"] == "12"
        assert result["HmAd"] == "a"

    def test_without_extension(self):
        """A street with only a number gets no extension."""
        result = convert_street_name({"Ad": "Kerkstraat 12"})
        assert result["Ad"] == "Kerkstraat"
        assert result["HmNr"] == "12"
        assert "HmAd" not in result

    def test_other_countries_are_not_split(self):
        """Streets in countries with other conventions are left alone."""
        result = convert_street_name({"Ad": "12 Main Street", "CoId": "US"})
        assert result == {"Ad": "12 Main Street", "CoId": "US"}

    def test_extension_split_from_number(self):
        """An extension in the house number field is moved to HmAd."""
        result = convert_street_name({"Ad": "Main Street", "HmNr": "12 B", "CoId": "US"})
        assert result["HmNr"] == "12"
        assert result["HmAd"] == "B"
