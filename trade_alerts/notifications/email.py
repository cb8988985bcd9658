import os
import smtplib
from email.mime.text import MIMEText
from trade_alerts.logging import log_event
from trade_alerts.config import EMAIL_USER, EMAIL_PASS, SMTP_HOST, SMTP_PORT
from trade_alerts.notifications.email_template import prepare_email_body

def send_email(to_email, subject, body):
    """
    Sends an HTML email to the specified recipient.
    Logs the process and handles any exceptions that occur during sending.
    """
    log_event("INFO", "Preparing to send email", to=to_email, subject=subject, github_sha=os.getenv("GITHUB_SHA"))
    msg = MIMEText(body, "html")
    msg['Subject'] = subject
    msg['From'] = EMAIL_USER
    msg['To'] = to_email
    try:
        with smtplib.SMTP(SMTP_HOST, SMTP_PORT) as server:
            server.starttls()
            server.login(EMAIL_USER, EMAIL_PASS)
            server.sendmail(EMAIL_USER, [to_email], msg.as_string())
            log_event("INFO", "Email sent", to=to_email, subject=subject)
    except (smtplib.SMTPException, OSError) as e:
        log_event("ERROR", f"Failed to send email to {to_email}", error=str(e))


class EmailNotifier:
    """
    Notification sink for the evaluator: one email per recipient for every
    triggered alert. Delivery failures are logged, never raised.
    """

    def __init__(self, recipients):
        self.recipients = sorted(set(recipients))

    def __call__(self, triggered):
        alert = triggered.alert
        subject = f"! {alert.symbol} alert triggered | trade alerts"
        body = prepare_email_body(alert, triggered.price)
        for recipient in self.recipients:
            send_email(recipient, subject, body)
