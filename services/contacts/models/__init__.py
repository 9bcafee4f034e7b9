from services.contacts.models.contact import Contact

__all__ = ["Contact"]
