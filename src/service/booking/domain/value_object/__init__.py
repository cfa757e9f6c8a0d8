from src.service.booking.domain.value_object.state_transition_entry import StateTransitionEntry
from src.service.booking.domain.value_object.transition_result import TransitionResult

__all__ = ['StateTransitionEntry', 'TransitionResult']
