import logging
from app.core.config import settings
from app.tests.constants.contact import ContactTestConstants

CONTACT_URL = f"{settings.API_PREFIX}/contact"


class TestContactEndpoint:

    def test_submit_contact_form_without_credentials(self, contact_client, mock_transport, caplog):
        """A valid submission with no mail credentials is logged and acknowledged."""
        caplog.set_level(logging.INFO, logger="app.services.contact_service")
        client = contact_client(has_credentials=False)

        response = client.post(CONTACT_URL, json=ContactTestConstants.MOCK_VALID_SUBMISSION.value)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": ContactTestConstants.MOCK_SUCCESS_MESSAGE.value,
        }
        assert "email not configured" in caplog.text
        assert "Hi there" in caplog.text

        # assert the transport was never used
        mock_transport.deliver.assert_not_called()

    def test_submit_contact_form_sends_email(self, contact_client, mock_transport):
        """A valid submission with credentials is delivered through the transport."""
        client = contact_client(has_credentials=True, is_production=True)

        response = client.post(CONTACT_URL, json=ContactTestConstants.MOCK_VALID_SUBMISSION.value)

        assert response.status_code == 200
        assert response.json()["success"] is True

        mock_transport.deliver.assert_called_once()
        outbound = mock_transport.deliver.call_args.args[0]
        assert outbound.subject == "Portfolio Contact: Hello"
        assert outbound.reply_to == "jane@example.com"
        assert outbound.recipients == [ContactTestConstants.MOCK_DESTINATION_ADDRESS.value]

    def test_submit_contact_form_missing_name(self, contact_client):
        """An empty name is rejected with a message listing every required field."""
        client = contact_client()

        response = client.post(
            CONTACT_URL,
            json={"name": "", "email": "jane@example.com", "subject": "Hi", "message": "x"},
        )

        assert response.status_code == 400
        error = response.json()["error"]
        for field in ("name", "email", "subject", "message"):
            assert field in error

    def test_submit_contact_form_missing_keys(self, contact_client):
        """Keys absent from the body are treated as empty."""
        client = contact_client()

        response = client.post(CONTACT_URL, json={"email": "jane@example.com"})

        assert response.status_code == 400
        assert response.json() == {"error": "All fields are required: name, email, subject, message"}

    def test_submit_contact_form_invalid_email(self, contact_client):
        """A malformed email address is rejected."""
        client = contact_client()

        response = client.post(
            CONTACT_URL,
            json={"name": "A", "email": "not-an-email", "subject": "Hi", "message": "x"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Please provide a valid email address"}

    def test_submit_contact_form_message_too_long(self, contact_client):
        """A message over 1000 characters is rejected."""
        client = contact_client()
        payload = {**ContactTestConstants.MOCK_VALID_SUBMISSION.value, "message": "x" * 1001}

        response = client.post(CONTACT_URL, json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Input length exceeds maximum allowed"}

    def test_submit_contact_form_not_an_object(self, contact_client):
        """A body that is not a JSON object is treated as an empty form."""
        client = contact_client()

        response = client.post(CONTACT_URL, json=["not", "an", "object"])

        assert response.status_code == 400
        assert response.json() == {"error": "All fields are required: name, email, subject, message"}

    def test_submit_contact_form_empty_body(self, contact_client):
        """A POST without a body is reported as missing fields."""
        client = contact_client()

        response = client.post(CONTACT_URL)

        assert response.status_code == 400
        assert response.json() == {"error": "All fields are required: name, email, subject, message"}

    def test_submit_contact_form_malformed_json(self, contact_client):
        """Unparseable JSON is treated as an empty form."""
        client = contact_client()

        response = client.post(
            CONTACT_URL,
            content=b'{"name": "Jane",',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "All fields are required: name, email, subject, message"}

    def test_submit_contact_form_throttled_whatever_the_body(self, contact_client):
        """A throttled caller gets 429 whatever the body looks like."""
        client = contact_client()
        payload = ContactTestConstants.MOCK_VALID_SUBMISSION.value

        for _ in range(5):
            assert client.post(CONTACT_URL, json=payload).status_code == 200

        bodies = [
            {"json": ["x"]},
            {},
            {"content": b"{oops", "headers": {"Content-Type": "application/json"}},
        ]
        for body in bodies:
            response = client.post(CONTACT_URL, **body)
            assert response.status_code == 429
            assert response.json() == {
                "error": "Too many contact form submissions, please try again later."
            }

    def test_submit_contact_form_empty_bodies_are_counted(self, contact_client):
        """Empty and malformed bodies count against the submission limit."""
        client = contact_client()

        for _ in range(3):
            assert client.post(CONTACT_URL).status_code == 400
        for _ in range(2):
            assert client.post(CONTACT_URL, json="just a string").status_code == 400

        response = client.post(CONTACT_URL, json=ContactTestConstants.MOCK_VALID_SUBMISSION.value)

        assert response.status_code == 429

    def test_submit_contact_form_rate_limited(self, contact_client, fake_clock):
        """The sixth submission inside the window is throttled, the window then resets."""
        client = contact_client()
        payload = ContactTestConstants.MOCK_VALID_SUBMISSION.value

        for _ in range(5):
            assert client.post(CONTACT_URL, json=payload).status_code == 200

        response = client.post(CONTACT_URL, json=payload)

        assert response.status_code == 429
        assert response.json() == {
            "error": "Too many contact form submissions, please try again later."
        }
        assert int(response.headers["retry-after"]) > 0

        fake_clock.advance(15 * 60)

        assert client.post(CONTACT_URL, json=payload).status_code == 200

    def test_submit_contact_form_delivery_failure_in_production(self, contact_client, mock_transport):
        """A transport failure in production is reported as 502."""
        mock_transport.deliver.side_effect = ConnectionError("SMTP relay unreachable")
        client = contact_client(has_credentials=True, is_production=True)

        response = client.post(CONTACT_URL, json=ContactTestConstants.MOCK_VALID_SUBMISSION.value)

        assert response.status_code == 502
        assert response.json() == {
            "error": "Email service temporarily unavailable. Please try again later."
        }

    def test_submit_contact_form_delivery_failure_in_development(
        self, contact_client, mock_transport, caplog
    ):
        """A transport failure outside production falls back to the diagnostic log."""
        caplog.set_level(logging.INFO, logger="app.services.contact_service")
        mock_transport.deliver.return_value = ContactTestConstants.MOCK_SES_FAILURE_RESPONSE.value
        client = contact_client(has_credentials=True, is_production=False)

        response = client.post(CONTACT_URL, json=ContactTestConstants.MOCK_VALID_SUBMISSION.value)

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert "Dev fallback" in caplog.text

    def test_submit_contact_form_unexpected_error(self, contact_client, contact_renderer, mocker):
        """Unexpected failures surface as a generic 500."""
        mocker.patch.object(
            contact_renderer,
            "build_contact_email",
            side_effect=RuntimeError("template missing"),
        )
        client = contact_client()

        response = client.post(CONTACT_URL, json=ContactTestConstants.MOCK_VALID_SUBMISSION.value)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to send message. Please try again later."}

    def test_get_contact_info(self, client):
        """Contact details are served from the portfolio personal section."""
        response = client.get(f"{CONTACT_URL}/info")

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"email", "phone", "location", "linkedin", "github", "availability"}
        assert body["email"] == "amarasravya65@gmail.com"

    def test_get_contact_info_not_rate_limited(self, client):
        """Reading contact details never counts against the submission limit."""
        for _ in range(10):
            assert client.get(f"{CONTACT_URL}/info").status_code == 200
