"""
Record store, image storage and export rendering.
"""
import csv
import io
import json

from chequeai import exports, storage, store


def _insert(db, owner_id, **fields):
    extracted_text = fields.pop("extracted_text", None)
    image_filename = fields.pop("image_filename", None)
    return store.insert(db, owner_id, fields, image_filename=image_filename, extracted_text=extracted_text)


# =====================================================================
# Owner scoping
# =====================================================================
class TestRecordStore:
    def test_insert_and_get(self, db, user):
        check = _insert(db, user.id, payee_name="ACME", currency_name="USD")
        assert check.id is not None
        assert check.created_at is not None
        fetched = store.get_by_id(db, check.id, user.id)
        assert fetched is not None
        assert fetched.payee_name == "ACME"

    def test_other_owner_sees_not_found(self, db, user, other_user):
        mine = _insert(db, user.id, payee_name="MINE")
        _insert(db, user.id, payee_name="ALSO MINE")
        assert store.get_by_id(db, mine.id, other_user.id) is None

    def test_missing_id(self, db, user):
        assert store.get_by_id(db, 9999, user.id) is None

    def test_list_by_owner_only_returns_own_newest_first(self, db, user, other_user):
        first = _insert(db, user.id, payee_name="FIRST")
        second = _insert(db, user.id, payee_name="SECOND")
        _insert(db, other_user.id, payee_name="THEIRS")
        rows = store.list_by_owner(db, user.id)
        assert [r.id for r in rows] == [second.id, first.id]

    def test_update_extracted_rewrites_columns_and_text(self, db, user):
        check = _insert(db, user.id, payee_name="OLD", currency_name="AUD", extracted_text="garbage")
        created_at = check.created_at
        updated = store.update_extracted(
            db, check.id, user.id, {"payee_name": "NEW", "amount_number": "5.00"}
        )
        assert updated.payee_name == "NEW"
        assert updated.amount_number == "5.00"
        assert updated.micr_code == ""
        assert updated.currency_name == "AUD"
        assert json.loads(updated.extracted_text) == {"payee_name": "NEW", "amount_number": "5.00"}
        assert updated.created_at == created_at

    def test_update_extracted_other_owner(self, db, user, other_user):
        check = _insert(db, user.id, payee_name="MINE")
        assert store.update_extracted(db, check.id, other_user.id, {"payee_name": "HACKED"}) is None
        db.refresh(check)
        assert check.payee_name == "MINE"

    def test_delete(self, db, user):
        check = _insert(db, user.id)
        assert store.delete(db, check.id, user.id) is True
        assert store.get_by_id(db, check.id, user.id) is None
        assert store.delete(db, check.id, user.id) is False

    def test_delete_other_owner(self, db, user, other_user):
        check = _insert(db, user.id)
        assert store.delete(db, check.id, other_user.id) is False
        assert store.get_by_id(db, check.id, user.id) is not None

    def test_delete_removes_image(self, db, user):
        name = storage.save_image(b"fake-image", "cheque.png")
        check = _insert(db, user.id, image_filename=name)
        assert storage.image_path(name).exists()
        store.delete(db, check.id, user.id)
        assert not storage.image_path(name).exists()

    def test_delete_with_missing_image(self, db, user):
        check = _insert(db, user.id, image_filename="never-existed.jpg")
        assert store.delete(db, check.id, user.id) is True


# =====================================================================
# Image storage
# =====================================================================
class TestStorage:
    def test_allowed_image(self):
        assert storage.allowed_image("cheque.JPG", "image/jpeg")
        assert storage.allowed_image("cheque.png", "image/png")
        assert not storage.allowed_image("cheque.pdf", "application/pdf")
        assert not storage.allowed_image("cheque.png", "text/plain")
        assert not storage.allowed_image("noext", "image/png")
        assert not storage.allowed_image(None, "image/png")

    def test_image_path_drops_directories(self):
        assert storage.image_path("../../etc/passwd").name == "passwd"
        assert storage.image_path("../../etc/passwd").parent == storage.upload_dir()


# =====================================================================
# Exports
# =====================================================================
class TestExports:
    def test_csv_uses_reconciled_values(self, db, user):
        check = _insert(
            db,
            user.id,
            payee_name="",
            amount_number="8.01",
            extracted_text='{"payee_name": "JULIUS EVENTS COLLEGE PTY LTD"}',
        )
        rows = list(csv.reader(io.StringIO(exports.render_csv(check))))
        assert rows[0] == ["Field", "Value"]
        values = dict(rows[1:])
        assert values["Payee Name"] == "JULIUS EVENTS COLLEGE PTY LTD"
        assert values["Amount (Numbers)"] == "8.01"
        assert values["Currency"] == "USD"
        assert values["MICR Code"] == "Not available"
        assert "Extracted On" in values

    def test_csv_filename(self, db, user):
        check = _insert(db, user.id, payee_name="ACME Pty/Ltd")
        name = exports.csv_filename(check)
        assert name.startswith("bank_check_ACME_Pty_Ltd_")
        assert name.endswith(".csv")

    def test_csv_filename_without_payee(self, db, user):
        check = _insert(db, user.id)
        assert exports.csv_filename(check).startswith("bank_check_unknown_")

    def test_pdf(self, db, user):
        check = _insert(
            db,
            user.id,
            payee_name="A & B <Trading>",
            image_filename="file-x.png",
            extracted_text='```json\n{"payee_name": "A & B"}\n```',
        )
        data = exports.render_pdf(check)
        assert data.startswith(b"%PDF")
        assert exports.pdf_filename(check).endswith(".pdf")
