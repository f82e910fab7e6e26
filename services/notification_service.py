import logging
import os
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart

logger = logging.getLogger(__name__)

class NotificationService:
    @staticmethod
    def send_rfq_notification(record):
        """
        Notify the sales desk about a new RFQ by e-mail.
        Without SMTP settings only a log line is written.
        """
        name = record.get('name') or 'unknown'
        company = record.get('company') or 'unknown'
        product = record.get('target_product') or 'no product bound'

        subject = f"[Carelink] New RFQ from {company}"
        body = (
            f"Name: {name}\n"
            f"Organization: {company}\n"
            f"Email: {record.get('email', '')}\n"
            f"Product: {product}\n"
            f"Interest: {record.get('interest', '')}\n\n"
            f"{record.get('clean_message', '')}"
        )
        NotificationService.send_email(subject=subject, body=body)

    @staticmethod
    def send_email(subject, body):
        smtp_user = os.environ.get('SMTP_USER')
        smtp_pass = os.environ.get('SMTP_PASS')
        admin_email = os.environ.get('ADMIN_EMAIL')

        if not all([smtp_user, smtp_pass, admin_email]):
            logger.info(f"[MOCK EMAIL] To: {admin_email} | Subject: {subject}")
            logger.info("  => SMTP settings missing, no mail was sent.")
            return

        try:
            msg = MIMEMultipart()
            msg['From'] = smtp_user
            msg['To'] = admin_email
            msg['Subject'] = subject
            msg.attach(MIMEText(body, 'plain', 'utf-8'))

            smtp_host = os.environ.get('SMTP_HOST', 'smtp.gmail.com')
            smtp_port = int(os.environ.get('SMTP_PORT', '465'))
            with smtplib.SMTP_SSL(smtp_host, smtp_port) as server:
                server.login(smtp_user, smtp_pass)
                server.send_message(msg)

            logger.info(f"[EMAIL SENT] To: {admin_email} | Subject: {subject}")
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"[EMAIL FAILED] {e}")
