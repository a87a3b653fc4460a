"""
Tests for the card add/edit session.
"""

import pytest

from swiftcard.editor import CardEditor
from swiftcard.exceptions import CardNotFoundError
from swiftcard.models import BusinessCard
from swiftcard.parser import get_parser
from swiftcard.repository import BusinessCardRepository
from swiftcard.storage import ImageStore


class TestCardEditor:
    """Test cases for CardEditor."""

    @pytest.fixture
    def repository(self):
        return BusinessCardRepository()

    @pytest.fixture
    def editor(self, repository, tmp_path):
        """Create editor with a temporary image folder."""
        return CardEditor(repository, ImageStore(folder=str(tmp_path)))

    def test_new_card_and_save(self, editor, repository):
        editor.new_card()
        editor.update(name="Jane Doe", title=" CTO ")
        result = editor.save()

        assert result.success
        assert result.value.id
        assert repository.get(result.value.id).title == "CTO"
        assert editor.current.id == result.value.id

    def test_update_rejects_other_fields(self, editor):
        editor.new_card()
        with pytest.raises(ValueError):
            editor.update(id="forged")

    def test_load_missing(self, editor):
        result = editor.load("missing")

        assert not result.success
        assert isinstance(result.error, CardNotFoundError)
        assert editor.current is None

    def test_load_existing(self, editor, repository):
        stored = repository.save(BusinessCard(name="Jane Doe"))

        assert editor.load(stored.id).value == stored

    def test_apply_extraction_keeps_existing_values(self, editor, repository):
        """Test only the fields found by a scan are overwritten."""
        stored = repository.save(BusinessCard(name="Jane Doe", company="Globex"))
        editor.load(stored.id)

        card = editor.apply_extraction(get_parser().parse(["CEO"]))

        assert card.id == stored.id
        assert card.company == "Globex"
        assert card.title == "CEO"

    def test_apply_extraction_from_dict(self, editor):
        editor.new_card()
        card = editor.apply_extraction({"name": "Jane Doe", "rawText": "Jane Doe"})

        assert card.name == "Jane Doe"

    def test_apply_extraction_wrong_profile(self, editor):
        editor.new_card()
        with pytest.raises(ValueError):
            editor.apply_extraction(get_parser("id_card").parse(["Name: Ravi Kumar"]))

    def test_save_without_card(self, editor):
        assert not editor.save().success

    def test_saving_flag(self, editor):
        flags = []
        editor.is_saving.subscribe(flags.append, emit_current=False)
        editor.new_card()
        editor.save()

        assert flags == [True, False]

    def test_attach_image_requires_saved_card(self, editor):
        editor.new_card()
        result = editor.attach_image(b"data")

        assert not result.success
        assert editor.messages == ["Please save card details first if adding new image for new card."]

    def test_attach_image(self, editor, repository):
        editor.new_card()
        editor.update(name="Jane Doe")
        saved = editor.save().value

        result = editor.attach_image(b"data", "png")

        assert result.success
        assert result.value.image_url == f"/api/images/{saved.id}.png"
        assert repository.get(saved.id).image_url == result.value.image_url
        assert editor.messages == ["Uploading image...", "Image uploaded successfully!"]
        assert editor.is_uploading.value is False

    def test_attach_image_upload_failure(self, editor):
        editor.new_card()
        editor.save()

        result = editor.attach_image(b"")

        assert not result.success
        assert editor.messages[-1].startswith("Error uploading image:")
        assert editor.current.image_url is None

    def test_attach_image_without_store(self, repository):
        editor = CardEditor(repository)
        editor.new_card()
        editor.save()

        assert not editor.attach_image(b"data").success

    def test_delete(self, editor, repository):
        editor.new_card()
        saved = editor.save().value

        assert editor.delete().value == saved.id
        assert repository.get(saved.id) is None
        assert editor.current is None

    def test_delete_unsaved(self, editor):
        editor.new_card()

        assert not editor.delete().success
