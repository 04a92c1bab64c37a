"""
Tests for the Qt controllers, driven through pytest-qt.

Covers:
- FieldController signals for drop, pointer sessions and edits
- ViewController announcements
- DocumentController upload/sign flow with a fake service client
"""
import fitz
import pytest
from PyQt5.QtCore import QThread

from controllers import DocumentController, FieldController, ViewController
from core.document import DocumentSession, ViewMode, ViewState
from core.document.pdf_reader import PDFDocumentReader
from core.errors import SignError, UploadError
from core.fields import CoordinateTransform, FieldStore, FieldType
from core.interaction import CreationProtocol, PointerInteractionController
from core.signing import DocumentHandle


@pytest.fixture
def view_state():
    state = ViewState()
    state.update_page_pixel_size(800, 1000)
    return state


@pytest.fixture
def field_controller(qapp, view_state):
    transform = CoordinateTransform(view_state.get_page_pixel_size)
    store = FieldStore(transform)
    return FieldController(
        store,
        PointerInteractionController(store, transform),
        CreationProtocol(store),
    )


@pytest.fixture
def view_controller(qapp, view_state):
    return ViewController(view_state)


# ══════════════════════════════════════════════════════════════════════════
# FieldController
# ══════════════════════════════════════════════════════════════════════════

class TestFieldController:

    def test_palette_drag_and_drop(self, qtbot, field_controller):
        previews = []
        field_controller.preview_changed.connect(previews.append)

        token = field_controller.start_palette_drag(FieldType.SIGNATURE)
        assert token == "signature"

        with qtbot.waitSignals([field_controller.fields_changed,
                                field_controller.selection_changed]):
            field = field_controller.drop(token.encode(), (400, 500), 0)

        assert field.field_type is FieldType.SIGNATURE
        assert field_controller.selected_field == field
        assert previews[0].label == "Signature"
        assert previews[-1] is None

    def test_foreign_drop_is_ignored(self, qtbot, field_controller):
        with qtbot.assertNotEmitted(field_controller.fields_changed):
            assert field_controller.drop(b"text/plain junk", (10, 10), 0) is None

    def test_drag_session(self, qtbot, field_controller):
        field = field_controller.drop("text", (400, 500), 0)
        view, on_handle = field_controller.field_at(0, 330, 490)
        assert view.id == field.id and not on_handle

        assert field_controller.press_field(field.id, (100, 100), on_handle)
        assert field_controller.is_interacting
        with qtbot.waitSignal(field_controller.fields_changed):
            field_controller.move_pointer((120, 110))
        field_controller.release_pointer()
        assert not field_controller.is_interacting

        rect = field_controller.views_for_page(0)[0].rect
        assert rect.origin == pytest.approx((340, 490))

    def test_press_moves_selection_and_repaints(self, qtbot, field_controller):
        first = field_controller.drop("text", (100, 100), 0)
        second = field_controller.drop("date", (400, 500), 0)
        assert field_controller.selected_field == second

        with qtbot.waitSignals([field_controller.selection_changed,
                                field_controller.fields_changed]):
            assert field_controller.press_field(first.id, (0, 0), False)
        field_controller.release_pointer()

        views = {view.id: view for view in field_controller.views_for_page(0)}
        assert views[first.id].selected
        assert not views[second.id].selected

    def test_press_on_selected_field_is_quiet(self, qtbot, field_controller):
        field = field_controller.drop("text", (400, 500), 0)
        with qtbot.assertNotEmitted(field_controller.selection_changed):
            field_controller.press_field(field.id, (0, 0), False)
        field_controller.release_pointer()

    def test_resize_via_handle(self, field_controller):
        field = field_controller.drop("text", (400, 500), 0)
        view, on_handle = field_controller.field_at(0, 475, 515)
        assert on_handle
        field_controller.press_field(view.id, (0, 0), on_handle)
        field_controller.move_pointer((-500, -500))
        field_controller.release_pointer()
        rect = field_controller.views_for_page(0)[0].rect
        assert rect.size == pytest.approx((30, 20))

    def test_edits(self, qtbot, field_controller):
        text = field_controller.drop("text", (400, 500), 0)
        radio = field_controller.drop("radio", (100, 100), 0)
        field_controller.set_value(text.id, "Jane")
        field_controller.set_checked(radio.id, True)
        assert field_controller.store.get(text.id).value == "Jane"
        assert field_controller.store.get(radio.id).checked is True

    def test_delete_selected(self, qtbot, field_controller):
        field_controller.drop("date", (400, 500), 0)
        with qtbot.waitSignal(field_controller.selection_changed) as blocker:
            assert field_controller.delete_selected()
        assert blocker.args == [None]
        assert field_controller.delete_selected() is False

    def test_select_none(self, qtbot, field_controller):
        field_controller.drop("date", (400, 500), 0)
        with qtbot.waitSignal(field_controller.selection_changed):
            field_controller.select(None)
        assert field_controller.selected_field is None

    def test_reset_ends_session(self, field_controller):
        field = field_controller.drop("text", (400, 500), 0)
        field_controller.press_field(field.id, (0, 0), False)
        field_controller.reset()
        assert not field_controller.is_interacting
        assert len(field_controller.store) == 0


# ══════════════════════════════════════════════════════════════════════════
# ViewController
# ══════════════════════════════════════════════════════════════════════════

class TestViewController:

    def test_zoom_signal(self, qtbot, view_controller):
        with qtbot.waitSignal(view_controller.zoom_changed) as blocker:
            view_controller.zoom_in()
        assert blocker.args == [1.1]
        assert view_controller.get_zoom_percent() == 110

    def test_page_signals(self, qtbot, view_controller):
        with qtbot.waitSignal(view_controller.page_count_changed):
            view_controller.set_document_info(4)
        with qtbot.waitSignal(view_controller.page_changed) as blocker:
            view_controller.jump_to_page(3)
        assert blocker.args == [3]
        with qtbot.assertNotEmitted(view_controller.page_changed):
            view_controller.jump_to_page(3)

    def test_page_size_signal(self, qtbot, view_controller, view_state):
        with qtbot.waitSignal(view_controller.page_size_changed):
            view_controller.on_page_rendered(1200, 1500)
        assert view_state.page_pixel_size.width == 1200
        with qtbot.assertNotEmitted(view_controller.page_size_changed):
            view_controller.on_page_rendered(1200, 1500)

    def test_view_mode(self, qtbot, view_controller, view_state):
        with qtbot.waitSignal(view_controller.view_mode_changed):
            view_controller.set_view_mode(ViewMode.MOBILE)
        assert view_state.max_viewer_width == 420


# ══════════════════════════════════════════════════════════════════════════
# DocumentController
# ══════════════════════════════════════════════════════════════════════════

def make_pdf(pages=2):
    doc = fitz.open()
    for _ in range(pages):
        doc.new_page(width=612, height=792)
    data = doc.tobytes()
    doc.close()
    return data


class FakeClient:
    def __init__(self, pdf_data=b"", upload_error=None, sign_error=None):
        self.pdf_data = pdf_data
        self.upload_error = upload_error
        self.sign_error = sign_error
        self.sign_requests = []

    def upload_pdf(self, file_path):
        if self.upload_error:
            raise self.upload_error
        return DocumentHandle("doc-1234567890", "https://backend/uploads/doc.pdf")

    def fetch_document(self, url):
        return self.pdf_data

    def sign_pdf(self, sign_request):
        self.sign_requests.append(sign_request)
        if self.sign_error:
            raise self.sign_error
        return "https://backend/signed/doc.pdf"


@pytest.fixture
def make_document_controller(field_controller, view_controller, view_state):
    readers = []
    controllers = []

    def make(client):
        session = DocumentSession(field_controller.store, view_state)
        reader = PDFDocumentReader()
        readers.append(reader)
        controller = DocumentController(session, client, reader, field_controller, view_controller)
        controllers.append(controller)
        return controller

    yield make
    for controller in controllers:
        for worker in controller.findChildren(QThread):
            worker.wait()
    for reader in readers:
        reader.close_document()


@pytest.fixture
def signature_png(tmp_path):
    path = tmp_path / "signature.png"
    path.write_bytes(b"\x89PNG")
    return str(path)


class TestDocumentController:

    def test_rejects_non_pdf(self, qtbot, make_document_controller):
        controller = make_document_controller(FakeClient())
        with qtbot.waitSignal(controller.file_rejected) as blocker:
            assert controller.upload("notes.txt") is False
        assert blocker.args == ["notes.txt is not a PDF file"]
        assert not controller.is_uploading

    def test_upload_replaces_document(self, qtbot, make_document_controller, field_controller,
                                      view_state):
        field_controller.drop("text", (100, 100), 0)
        controller = make_document_controller(FakeClient(make_pdf(3)))

        with qtbot.waitSignal(controller.document_loaded, timeout=5000) as blocker:
            assert controller.upload("contract.pdf") is True
            assert controller.is_uploading

        assert blocker.args[0].pdf_id == "doc-1234567890"
        assert len(field_controller.store) == 0
        assert view_state.num_pages == 3
        assert view_state.current_page == 1
        assert not controller.is_uploading

    def test_second_upload_rejected_while_busy(self, qtbot, make_document_controller):
        controller = make_document_controller(FakeClient(make_pdf()))
        with qtbot.waitSignal(controller.document_loaded, timeout=5000):
            assert controller.upload("a.pdf") is True
            assert controller.upload("b.pdf") is False

    def test_upload_failure_clears_busy(self, qtbot, make_document_controller):
        controller = make_document_controller(FakeClient(upload_error=UploadError("HTTP 500")))
        with qtbot.waitSignal(controller.upload_failed, timeout=5000) as blocker:
            controller.upload("contract.pdf")
        assert blocker.args == ["HTTP 500"]
        assert not controller.is_uploading

    def test_unreadable_upload(self, qtbot, make_document_controller):
        controller = make_document_controller(FakeClient(b"garbage"))
        with qtbot.waitSignal(controller.upload_failed, timeout=5000):
            controller.upload("contract.pdf")
        assert not controller.session.is_loaded
        assert not controller.is_uploading

    def test_sign_preconditions(self, qtbot, make_document_controller):
        controller = make_document_controller(FakeClient())
        with qtbot.waitSignal(controller.sign_rejected) as blocker:
            assert controller.sign() is False
        assert blocker.args == ["Upload a PDF first"]
        assert not controller.is_signing

    def test_unsupported_signature_image(self, qtbot, make_document_controller):
        controller = make_document_controller(FakeClient())
        with qtbot.waitSignal(controller.file_rejected):
            assert controller.set_signature_image("/tmp/sig.gif") is False

    def _load(self, qtbot, controller, view_state, signature_png):
        with qtbot.waitSignal(controller.document_loaded, timeout=5000):
            controller.upload("contract.pdf")
        view_state.update_page_pixel_size(800, 1000)
        with qtbot.waitSignal(controller.signature_changed):
            controller.set_signature_image(signature_png)

    def test_sign(self, qtbot, make_document_controller, field_controller, view_state,
                  signature_png):
        client = FakeClient(make_pdf())
        controller = make_document_controller(client)
        self._load(qtbot, controller, view_state, signature_png)
        field_controller.drop("signature", (400, 500), 0)

        with qtbot.waitSignal(controller.signed, timeout=5000) as blocker:
            assert controller.sign() is True
        assert blocker.args == ["https://backend/signed/doc.pdf"]
        assert client.sign_requests[0].fields[0]["type"] == "signature"
        assert not controller.is_signing

    def test_sign_failure_clears_busy(self, qtbot, make_document_controller, field_controller,
                                      view_state, signature_png):
        client = FakeClient(make_pdf(), sign_error=SignError("Service answered HTTP 502"))
        controller = make_document_controller(client)
        self._load(qtbot, controller, view_state, signature_png)
        field_controller.drop("signature", (400, 500), 0)

        with qtbot.waitSignal(controller.sign_failed, timeout=5000) as blocker:
            controller.sign()
        assert blocker.args == ["Service answered HTTP 502"]
        assert not controller.is_signing
