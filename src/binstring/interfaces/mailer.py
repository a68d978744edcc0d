"""Interface for the injected message transmission capability."""

import abc

# pylint: disable=too-few-public-methods,too-many-arguments,too-many-positional-arguments


class Mailer(abc.ABC):
    """Contract for sending a message.

    Arguments mirror a classic ``mail()`` call: recipients, subject and body,
    plus optional raw extra headers and transport parameters.
    """

    @abc.abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        message: str,
        headers: str | None = None,
        parameters: str | None = None,
    ) -> bool:
        """Hand a message to the transport.

        Returns:
            bool: True if the message was accepted for delivery.
        """
