# tests/test_submissions.py

import os
from concurrent.futures import ThreadPoolExecutor

import pytest

from app.services.errors import (
    MissingAttachment,
    NotificationFailure,
    PersistenceFailure,
    PoolExhausted,
)
from app.services.repository import KIND_CONTACTO, KIND_POSTULACION
from app.services.submissions import (
    MSG_CONTACTO_DB_ERROR,
    MSG_CONTACTO_OK,
    MSG_POSTULACION_DB_ERROR,
    SubmissionCoordinator,
)
from tests.fakes import CountingStore, FakeGateway, FakeNotifier

CONTACTO = {
    "nombre": "Ana",
    "apellido": "Gomez",
    "edad": 30,
    "telefono": "123",
    "email": "a@x.com",
    "provincia": "X",
    "localidad": "Y",
}

POSTULACION = dict(CONTACTO, dni="30111222", direccion="Calle 1")


def test_contact_form_inserts_seven_fields(store):
    gateway = FakeGateway()
    coordinator = SubmissionCoordinator(gateway, FakeNotifier(), store)

    outcome = coordinator.handle(KIND_CONTACTO, CONTACTO)

    assert outcome.ok is True
    assert outcome.status_code == 200
    assert outcome.message == MSG_CONTACTO_OK
    assert len(gateway.records) == 1
    assert gateway.records[0].as_dict() == CONTACTO


def test_contact_form_persistence_failure_is_terminal(store):
    notifier = FakeNotifier()
    coordinator = SubmissionCoordinator(FakeGateway(fail=PersistenceFailure("db down")), notifier, store)

    outcome = coordinator.handle_contact(CONTACTO)

    assert outcome.ok is False
    assert outcome.status_code == 500
    assert outcome.message == MSG_CONTACTO_DB_ERROR
    assert notifier.sent == []


def test_contact_form_pool_exhausted_returns_500(store):
    coordinator = SubmissionCoordinator(FakeGateway(fail=PoolExhausted("timeout")), FakeNotifier(), store)

    outcome = coordinator.handle_contact(CONTACTO)

    assert outcome.status_code == 500
    assert isinstance(outcome.errors[-1], PoolExhausted)


@pytest.mark.parametrize(
    "db_error, mail_error, status, last_error",
    [
        (None, None, 200, None),
        (PersistenceFailure("db"), None, 500, PersistenceFailure),
        (None, NotificationFailure("smtp"), 500, NotificationFailure),
        (PersistenceFailure("db"), NotificationFailure("smtp"), 500, NotificationFailure),
    ],
)
def test_job_application_always_releases_attachment(make_upload, upload_dir, db_error, mail_error, status, last_error):
    store = CountingStore(str(upload_dir))
    att = store.open(make_upload())
    gateway = FakeGateway(fail=db_error)
    notifier = FakeNotifier(fail=mail_error)
    coordinator = SubmissionCoordinator(gateway, notifier, store)

    outcome = coordinator.handle(KIND_POSTULACION, POSTULACION, att)

    assert not os.path.exists(att.path)
    assert store.releases == {att.path: 1}
    assert outcome.status_code == status
    assert outcome.ok is (last_error is None)
    if last_error is not None:
        assert isinstance(outcome.errors[-1], last_error)


def test_persistence_failure_still_sends_mail_by_default(store, make_upload):
    att = store.open(make_upload())
    notifier = FakeNotifier()
    coordinator = SubmissionCoordinator(FakeGateway(fail=PersistenceFailure("db")), notifier, store)

    outcome = coordinator.handle_job_application(POSTULACION, att)

    assert len(notifier.sent) == 1
    # nunca reporta exito si algo fallo
    assert outcome.ok is False
    assert outcome.message == MSG_POSTULACION_DB_ERROR


def test_persistence_failure_can_gate_notification(store, make_upload):
    att = store.open(make_upload())
    notifier = FakeNotifier()
    coordinator = SubmissionCoordinator(
        FakeGateway(fail=PersistenceFailure("db")), notifier, store, notify_requires_persistence=True
    )

    outcome = coordinator.handle_job_application(POSTULACION, att)

    assert notifier.sent == []
    assert outcome.status_code == 500
    assert not os.path.exists(att.path)


def test_missing_attachment_has_no_side_effects(store, make_upload):
    other = make_upload("otro.pdf")
    gateway = FakeGateway()
    notifier = FakeNotifier()
    coordinator = SubmissionCoordinator(gateway, notifier, store)

    outcome = coordinator.handle(KIND_POSTULACION, POSTULACION, None)

    assert outcome.status_code == 400
    assert isinstance(outcome.errors[0], MissingAttachment)
    assert gateway.records == []
    assert notifier.sent == []
    assert os.path.exists(other)


def test_unexpected_error_still_releases_attachment(store, make_upload):
    att = store.open(make_upload())

    class BrokenNotifier(FakeNotifier):
        def send(self, notification):
            raise RuntimeError("bug")

    coordinator = SubmissionCoordinator(FakeGateway(), BrokenNotifier(), store)

    with pytest.raises(RuntimeError):
        coordinator.handle_job_application(POSTULACION, att)

    assert not os.path.exists(att.path)


def test_concurrent_job_applications_release_their_own_file(make_upload, upload_dir):
    store = CountingStore(str(upload_dir))
    gateway = FakeGateway()
    notifier = FakeNotifier()
    coordinator = SubmissionCoordinator(gateway, notifier, store)

    attachments = [store.open(make_upload(f"cv_{i}.pdf", f"cv {i}".encode())) for i in range(20)]

    def _submit(i):
        return coordinator.handle_job_application(dict(POSTULACION, dni=str(i)), attachments[i])

    with ThreadPoolExecutor(max_workers=20) as pool:
        outcomes = list(pool.map(_submit, range(20)))

    assert all(o.ok for o in outcomes)
    assert len(gateway.records) == 20
    assert sorted(r.as_dict()["dni"] for r in gateway.records) == sorted(str(i) for i in range(20))
    # cada mail salio con su propio CV
    assert sorted(n["attachment"].path for n in notifier.sent) == sorted(a.path for a in attachments)
    # exactamente un release por peticion, cada uno sobre su propio archivo
    assert store.releases == {a.path: 1 for a in attachments}
    assert os.listdir(upload_dir) == []
