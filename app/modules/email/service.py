import smtplib
import ssl
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import List, Optional, Dict, Any
from pathlib import Path
import logging
from jinja2 import Environment, FileSystemLoader, select_autoescape
from app.core.config import Settings

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """El servidor SMTP rechazó o no pudo entregar el mensaje."""


class EmailService:
    """
    Servicio de correo electrónico con soporte para templates Jinja2.

    Se instancia una vez por proceso con la configuración y se pasa a quien lo
    necesite. Sin credenciales SMTP funciona en modo desarrollo: registra el
    mensaje en el log y lo da por enviado.
    """

    def __init__(self, settings: Settings):
        self.smtp_server = settings.EMAIL_SMTP_SERVER
        self.smtp_port = settings.EMAIL_SMTP_PORT
        self.username = settings.EMAIL_USERNAME
        self.password = settings.EMAIL_PASSWORD
        self.use_tls = settings.EMAIL_USE_TLS
        self.from_email = settings.EMAIL_FROM or settings.EMAIL_USERNAME
        self.from_name = settings.EMAIL_FROM_NAME
        self.frontend_url = settings.FRONTEND_URL
        self.workshop_name = settings.WORKSHOP_NAME
        self.configured = settings.smtp_configured

        template_dir = Path(__file__).parent / "templates"
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(['html', 'xml'])
        )

    def _create_smtp_connection(self):
        """Crear conexión SMTP segura."""
        try:
            if self.use_tls:
                context = ssl.create_default_context()
                server = smtplib.SMTP(self.smtp_server, self.smtp_port)
                server.starttls(context=context)
            else:
                server = smtplib.SMTP_SSL(self.smtp_server, self.smtp_port)

            server.login(self.username, self.password)
            return server
        except Exception as e:
            logger.error(f"Error creating SMTP connection: {str(e)}")
            raise

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Renderizar template de email con contexto.

        Args:
            template_name: Nombre del archivo de template
            context: Variables para el template

        Returns:
            HTML renderizado del template
        """
        template = self.jinja_env.get_template(template_name)
        return template.render(workshop_name=self.workshop_name, **context)

    def deliver(
        self,
        to_emails: List[str],
        subject: str,
        html_content: Optional[str] = None,
        text_content: Optional[str] = None,
    ) -> None:
        """
        Entregar un correo o lanzar EmailDeliveryError.
        """
        if not self.configured:
            logger.info(
                f"[dev mode] Email to {', '.join(to_emails)} | {subject}\n{text_content or ''}"
            )
            return

        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = f"{self.from_name} <{self.from_email}>"
        msg['To'] = ', '.join(to_emails)

        if text_content:
            msg.attach(MIMEText(text_content, 'plain', 'utf-8'))
        if html_content:
            msg.attach(MIMEText(html_content, 'html', 'utf-8'))

        try:
            with self._create_smtp_connection() as server:
                server.sendmail(self.from_email, to_emails, msg.as_string())
        except Exception as e:
            raise EmailDeliveryError(str(e)) from e

        logger.info(f"Email sent successfully to {', '.join(to_emails)}")

    def deliver_template(
        self,
        to_emails: List[str],
        subject: str,
        template_name: str,
        context: Dict[str, Any],
        text_content: Optional[str] = None,
    ) -> None:
        html_content = self.render_template(template_name, context)
        self.deliver(to_emails, subject, html_content=html_content, text_content=text_content)

    def send_email(
        self,
        to_emails: List[str],
        subject: str,
        html_content: Optional[str] = None,
        text_content: Optional[str] = None,
    ) -> bool:
        """
        Enviar correo electrónico.

        Returns:
            True si se envió correctamente, False en caso contrario
        """
        try:
            self.deliver(to_emails, subject, html_content=html_content, text_content=text_content)
            return True
        except EmailDeliveryError as e:
            logger.error(f"Error sending email: {str(e)}")
            return False

    def send_template_email(
        self,
        to_emails: List[str],
        subject: str,
        template_name: str,
        context: Dict[str, Any],
        text_content: Optional[str] = None,
    ) -> bool:
        """
        Enviar correo usando template (ej: "otp_email.html").
        """
        try:
            self.deliver_template(to_emails, subject, template_name, context, text_content=text_content)
            return True
        except EmailDeliveryError as e:
            logger.error(f"Error sending template email: {str(e)}")
            return False

    def send_otp_email(self, to_email: str, user_name: str, otp: str, purpose: str, expires_minutes: int) -> bool:
        """OTP de verificación de email o de restablecimiento de contraseña."""
        if purpose == "reset":
            subject = f"Reset your password - {self.workshop_name}"
            heading = "Password Reset"
            label = "password-reset"
        else:
            subject = f"Verify your email - {self.workshop_name}"
            heading = "Email Verification"
            label = "verification"
        return self.send_template_email(
            to_emails=[to_email],
            subject=subject,
            template_name="otp_email.html",
            context={
                "user_name": user_name,
                "otp": otp,
                "heading": heading,
                "label": label,
                "expires_minutes": expires_minutes,
            },
            text_content=f"Your {label} OTP is {otp}. It expires in {expires_minutes} minutes.",
        )

    def send_service_reminder_email(
        self,
        to_email: str,
        customer_name: str,
        vehicle_label: str,
        plate_no: str,
        due_date: Optional[str],
        days_until: int,
    ) -> None:
        """
        Recordatorio de servicio para un vehículo.
        Lanza EmailDeliveryError si no se pudo entregar.
        """
        if days_until < 0:
            title = "Service Overdue"
            message = f"Your vehicle {vehicle_label} is overdue for service by {abs(days_until)} days."
        else:
            title = "Service Reminder"
            message = f"Your vehicle {vehicle_label} is due for service in {days_until} days."

        self.deliver_template(
            to_emails=[to_email],
            subject=f"{title} - {self.workshop_name}",
            template_name="service_reminder_email.html",
            context={
                "title": title,
                "customer_name": customer_name,
                "message": message,
                "vehicle_label": vehicle_label,
                "plate_no": plate_no,
                "due_date": due_date or "-",
            },
            text_content=f"Dear {customer_name}, {message}",
        )
