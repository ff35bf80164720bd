"""Typed failures raised by the interview engine.

Each carries the HTTP status the API layer maps it to.
``ExternalServiceFailure`` never leaves the engine: the question source
recovers from it with a fallback question.
"""


class InterviewerError(Exception):
    status_code = 500
    default_message = "Interview engine error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ExternalServiceFailure(InterviewerError):
    status_code = 502
    default_message = "Text generation service failed"


class InterviewNotFound(InterviewerError):
    status_code = 404
    default_message = "Interview not found"


class QuestionNotFound(InterviewerError):
    status_code = 404
    default_message = "Question not found"


class EmptyAnswer(InterviewerError):
    status_code = 400
    default_message = "Answer text is required"


class AlreadyAnswered(InterviewerError):
    status_code = 409
    default_message = "Question has already been answered"


class SessionComplete(InterviewerError):
    status_code = 409
    default_message = "All questions for this interview have been answered"


class SessionBusy(InterviewerError):
    status_code = 409
    default_message = "A question is already being generated for this interview"


class QuestionLimitReached(InterviewerError):
    status_code = 409
    default_message = "Requested number of questions already asked for this interview"
