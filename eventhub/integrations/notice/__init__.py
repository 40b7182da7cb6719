from eventhub.integrations.notice.mail import RegistrationMailer

__all__ = ["RegistrationMailer"]
