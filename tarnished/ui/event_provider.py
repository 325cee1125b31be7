from tarnished.ui.provider import UIProvider


class EventProvider(UIProvider):
    """
    Turns every UI call into an event dict on the owning session.
    Prompts return None; the answer arrives as the next step payload.
    """

    is_blocking = False

    def __init__(self, session):
        self.session = session

    def _push(self, kind, text, data=None):
        self.session.emit({"type": kind, "text": text, "data": data})

    def scene(self, text, data=None):
        self._push("scene", text, data)

    def narration(self, text, data=None):
        self._push("narration", text, data)

    def reward(self, text, data=None):
        self._push("reward", text, data)

    def system(self, text, data=None):
        self._push("system", text, data)

    def error(self, text, data=None):
        self._push("error", text, data)

    def choice(self, prompt, options, data=None):
        self.session.emit({"type": "choice", "prompt": prompt, "options": list(options)})
        return None

    def text_input(self, prompt, data=None):
        self.session.emit({"type": "input", "prompt": prompt})
        return None
