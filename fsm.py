"""
A simple finite state machine (FSM) implementation.
"""


class State:
    """Base class for a state in the FSM."""
    def __init__(self, owner):
        self.owner = owner

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def enter(self):
        """Code to execute when entering this state."""
        pass

    def exit(self):
        """Code to execute when exiting this state."""
        pass

    def update(self, dt: float):
        """Update logic for this state."""
        pass

    def draw(self, surface):
        """Render this state onto a surface."""
        pass

    def on_key_press(self, symbol, modifiers):
        """Handle key presses."""
        pass


class StateMachine:
    """A simple finite state machine."""
    def __init__(self, initial_state: State):
        self.current_state = None
        self._states = {}
        if initial_state:
            self.add_state(initial_state)
            self.set_state(initial_state.name)

    def add_state(self, state: State):
        """Adds a state to the machine."""
        self._states[state.name] = state

    def set_state(self, state_name: str):
        """Transitions to a new state."""
        new_state = self._states.get(state_name)
        if new_state is None:
            raise ValueError(f"State '{state_name}' not found.")

        if self.current_state:
            self.current_state.exit()
        self.current_state = new_state
        self.current_state.enter()

    @property
    def state_name(self) -> str:
        return self.current_state.name if self.current_state else ""

    def is_in(self, state_name: str) -> bool:
        return self.state_name == state_name

    def update(self, dt: float):
        if self.current_state:
            self.current_state.update(dt)

    def draw(self, surface):
        if self.current_state:
            self.current_state.draw(surface)

    def on_key_press(self, symbol, modifiers):
        if self.current_state:
            self.current_state.on_key_press(symbol, modifiers)
