# hospital_api/services/notification_service.py

"""
Appointment confirmation emails.

Messages are written to an outbox table inside the booking transaction and
delivered over SMTP only after that transaction commits, so a mail failure is
recorded on the message and never undoes or hides a booking.
"""

import html
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Dict
from sqlalchemy.orm import Session
from hospital_api.config.database import SessionLocal, settings
from hospital_api.models.appointment import Appointment
from hospital_api.models.base import utc_now
from hospital_api.models.notification import NotificationMessage, NotificationStatus
from hospital_api.services.repository import flush

logger = logging.getLogger(__name__)

APPOINTMENT_SUBJECT = "Appointment Confirmation"


class NotificationService:
    @staticmethod
    def render_appointment_email(appointment: Appointment) -> str:
        patient = appointment.patient
        doctor = appointment.doctor
        esc = html.escape

        return f"""
<html>
  <head>
    <style>
      body {{ font-family: Arial, sans-serif; }}
      .container {{ border: 1px solid #c0392b; padding: 10px; }}
    </style>
  </head>
  <body>
    <div class="container">
      <p>Dear {esc(patient.first_name)} {esc(patient.last_name)},</p>
      <p>You have an appointment on {appointment.date.strftime('%d.%m.%Y')} at {appointment.time.strftime('%H:%M')}.</p>
      <p>Doctor: {esc(doctor.title)} {esc(doctor.first_name)} {esc(doctor.last_name)}</p>
      <p>Branch: {esc(doctor.branch.name)}</p>
    </div>
  </body>
</html>"""

    @staticmethod
    def queue_appointment_confirmation(db: Session, appointment: Appointment) -> NotificationMessage:
        """Add the confirmation to the outbox; committed together with the appointment"""
        message = NotificationMessage(
            appointment_id=appointment.id,
            recipient=appointment.patient.email,
            subject=APPOINTMENT_SUBJECT,
            body=NotificationService.render_appointment_email(appointment),
            status=NotificationStatus.PENDING,
            attempts=0,
        )
        db.add(message)
        flush(db)
        return message

    @staticmethod
    def send_email(to: str, subject: str, html_content: str):
        """Send one HTML email; SMTP and socket errors propagate"""
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = formataddr((settings.mail_from_name, settings.mail_from_address))
        msg["To"] = to
        msg.attach(MIMEText(html_content, "html"))

        if settings.smtp_port == 465:
            context = ssl.create_default_context()
            server = smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port, context=context, timeout=30)
        else:
            server = smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=30)
            if settings.smtp_use_tls:
                server.starttls(context=ssl.create_default_context())

        try:
            if settings.smtp_username:
                server.login(settings.smtp_username, settings.smtp_password or "")
            server.sendmail(settings.mail_from_address, [to], msg.as_string())
        finally:
            server.quit()

    @staticmethod
    def deliver(db: Session, message: NotificationMessage) -> bool:
        if not settings.smtp_host:
            logger.info(f"SMTP not configured; notification {message.id} stays pending")
            return False

        message.attempts += 1
        try:
            NotificationService.send_email(message.recipient, message.subject, message.body)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            message.status = NotificationStatus.FAILED
            message.last_error = str(e)[:500]
            db.commit()
            logger.error(f"❌ Notification {message.id} to {message.recipient} failed: {e}")
            return False

        message.status = NotificationStatus.SENT
        message.last_error = None
        message.sent_date = utc_now()
        db.commit()
        logger.info(f"✓ Notification {message.id} sent to {message.recipient}")
        return True

    @staticmethod
    def deliver_message(message_id: int) -> bool:
        """Background task entry point; runs after the request transaction committed"""
        db = SessionLocal()
        try:
            message = db.query(NotificationMessage).filter(NotificationMessage.id == message_id).first()
            if not message:
                logger.warning(f"Notification {message_id} not found")
                return False
            if message.status == NotificationStatus.SENT:
                return True
            return NotificationService.deliver(db, message)
        finally:
            db.close()

    @staticmethod
    def dispatch_pending(db: Session, limit: int = 100) -> Dict[str, int]:
        """Deliver pending and previously failed messages, oldest first"""
        messages = db.query(NotificationMessage).filter(
            NotificationMessage.status.in_([NotificationStatus.PENDING, NotificationStatus.FAILED])
        ).order_by(NotificationMessage.id).limit(limit).all()

        summary = {"sent": 0, "failed": 0}
        for message in messages:
            if NotificationService.deliver(db, message):
                summary["sent"] += 1
            else:
                summary["failed"] += 1
        return summary
