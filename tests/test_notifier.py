# tests/test_notifier.py

import smtplib

import pytest

from app.extensions import mail
from app.services.errors import NotificationFailure
from app.services.notifier import MailNotifier
from app.services.repository import KIND_POSTULACION, SubmissionRecord

FORM = {
    "nombre": "Ana",
    "apellido": "Gomez",
    "edad": 30,
    "telefono": "123",
    "email": "a@x.com",
    "provincia": "X",
    "localidad": "Y",
    "dni": "30111222",
    "direccion": "Calle 1",
}


def test_build_notification(app, store, make_upload):
    att = store.open(make_upload("cv.pdf"), original_name="CV Ana.pdf")
    notifier = MailNotifier(mail, sender="formularios@test.local", recipient="rrhh@test.local")

    n = notifier.build(SubmissionRecord.from_form(KIND_POSTULACION, FORM), att)

    assert n.recipients == ["rrhh@test.local"]
    assert n.subject == "Nueva postulación: Ana Gomez"
    assert "DNI: 30111222" in n.body
    assert "Edad: 30" in n.body
    assert "CV: CV Ana.pdf" in n.body
    assert n.attachment is att


def test_send_attaches_cv(app, store, make_upload):
    att = store.open(make_upload("cv.pdf", b"%PDF-1.4 ana"))
    notifier = MailNotifier(mail, sender="formularios@test.local", recipient="rrhh@test.local")

    with mail.record_messages() as outbox:
        notifier.send(notifier.build(SubmissionRecord.from_form(KIND_POSTULACION, FORM), att))

    assert len(outbox) == 1
    msg = outbox[0]
    assert msg.recipients == ["rrhh@test.local"]
    assert msg.attachments[0].filename == "cv.pdf"
    assert msg.attachments[0].content_type == "application/pdf"
    assert msg.attachments[0].data == b"%PDF-1.4 ana"


class _BrokenMail:
    def __init__(self, error):
        self.error = error

    def send(self, message):
        raise self.error


@pytest.mark.parametrize("error", [
    smtplib.SMTPAuthenticationError(535, b"Authentication failed"),
    ConnectionRefusedError(111, "Connection refused"),
])
def test_transport_errors_become_notification_failure(app, store, make_upload, error):
    att = store.open(make_upload())
    notifier = MailNotifier(_BrokenMail(error), sender="formularios@test.local", recipient="rrhh@test.local")

    with pytest.raises(NotificationFailure):
        notifier.send(notifier.build(SubmissionRecord.from_form(KIND_POSTULACION, FORM), att))
