from geoglobe.models import GlobeState


class InteractionController:
    '''Turns pointer gestures into rotation of the globe

    Dragging adds to the persistent rotation state: horizontal motion changes
    yaw, vertical motion changes pitch. Dragging or hovering suspends the idle
    auto-rotation, which the animation loop checks every frame.
    '''

    def __init__(self, state: GlobeState, sensitivity: float = 0.01):
        '''
        Parameters
        ----------
        state : GlobeState
            View state shared with the animation loop
        sensitivity : float
            Radians of rotation per pixel of pointer motion
        '''
        self.state = state
        self.sensitivity = sensitivity

    @property
    def is_dragging(self) -> bool:
        return self.state.interaction.is_dragging

    def pointer_down(self, x: float, y: float) -> None:
        ui = self.state.interaction
        ui.is_dragging = True
        ui.last_position = (x, y)

    def pointer_move(self, x: float, y: float) -> None:
        ui = self.state.interaction
        if not ui.is_dragging:
            return
        last_x, last_y = ui.last_position if ui.last_position is not None else (x, y)
        dx = x - last_x
        dy = y - last_y

        rotation = self.state.rotation
        rotation.pitch += dy * self.sensitivity
        rotation.yaw += dx * self.sensitivity

        ui.last_position = (x, y)

    def pointer_up(self) -> None:
        self.state.interaction.is_dragging = False

    def pointer_enter(self) -> None:
        self.state.interaction.is_hovering = True

    def pointer_leave(self) -> None:
        ui = self.state.interaction
        ui.is_dragging = False
        ui.is_hovering = False
