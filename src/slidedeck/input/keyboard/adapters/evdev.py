from typing import Optional, Dict
import asyncio
from evdev import InputDevice, list_devices, ecodes
from slidedeck.models.events import KeyboardKeyPressEvent, KeyboardSource
from slidedeck.services.event_bus import EventBus
from slidedeck.utils.logger import get_logger, LogCategory
from .base import IKeyboardAdapter

log = get_logger().for_category(LogCategory.INPUT)

PURE_MODIFIERS = {
    "LEFTCTRL", "RIGHTCTRL", "LEFTSHIFT", "RIGHTSHIFT",
    "LEFTALT", "RIGHTALT", "LEFTMETA", "RIGHTMETA",
}


def normalize_key_name(key_name) -> str:
    """
    Normalize evdev key names to the adapter-neutral form: drop the KEY_
    prefix ('KEY_RIGHT' → 'RIGHT'). Modifier-only keys give ''.
    """
    if isinstance(key_name, (list, tuple)):
        key_name = key_name[0] if key_name else ""
    if not key_name:
        return ""
    nk = key_name.replace("KEY_", "", 1)
    if nk in PURE_MODIFIERS:
        return ""
    return nk


class EvdevKeyboardAdapter(IKeyboardAdapter):
    """
    Physical keyboard input via Linux evdev (/dev/input/event*)

    - Uses blocking device.read() executed in executor (thread)
    - Maps keycodes via ecodes.bytype
    - Tracks modifiers (CTRL/SHIFT/ALT)
    - Publishes KeyboardKeyPressEvent(normalized_key, modifiers) to EventBus
    """

    def __init__(self, event_bus: EventBus, device_path: Optional[str] = None):
        self.event_bus = event_bus
        self.device_path = device_path
        self.device: Optional[InputDevice] = None

        self._modifiers: Dict[str, bool] = {
            "CTRL": False,
            "SHIFT": False,
            "ALT": False
        }

    def _find_keyboard_device(self) -> Optional[str]:
        """
        Pick the /dev/input/eventX device that looks most like a full keyboard.
        """
        candidates = []

        for path in list_devices():
            try:
                device = InputDevice(path)
                caps = device.capabilities()
            except OSError as e:
                log.debug(f"Cannot inspect {path}: {e}")
                continue

            if ecodes.EV_KEY not in caps:
                continue

            raw_keys = caps.get(ecodes.EV_KEY, [])
            key_codes = [code if isinstance(code, int) else code[0] for code in raw_keys]

            has_letters = any(ecodes.KEY_A <= code <= ecodes.KEY_Z for code in key_codes)
            has_space = ecodes.KEY_SPACE in key_codes
            has_enter = ecodes.KEY_ENTER in key_codes

            if has_letters and has_space and has_enter:
                candidates.append((path, device.name, len(key_codes)))

        if not candidates:
            return None

        # More keys = more likely a full keyboard
        candidates.sort(key=lambda x: -x[2])
        best_path, best_name, num_keys = candidates[0]
        log.info("Selected keyboard device", name=best_name, path=best_path, total_keys=num_keys)
        return best_path

    async def run(self) -> None:
        """
        Read keyboard events until cancelled.

        Raises:
            RuntimeError: no usable keyboard device
        """
        if not self.device_path:
            self.device_path = self._find_keyboard_device()

        if not self.device_path:
            raise RuntimeError("No physical keyboard found via evdev")

        try:
            self.device = InputDevice(self.device_path)
        except OSError as e:
            raise RuntimeError(f"Cannot open keyboard device: {e}") from e

        loop = asyncio.get_running_loop()
        log.info("Physical keyboard active (evdev mode)", device=self.device.name, path=self.device_path)

        try:
            while True:
                try:
                    events = await loop.run_in_executor(None, self.device.read)
                except BlockingIOError:
                    await asyncio.sleep(0.01)
                    continue
                except OSError as e:
                    log.warn(f"Temporary read error: {e}")
                    await asyncio.sleep(0.1)
                    continue

                for event in events:
                    if event.type == ecodes.EV_KEY:
                        await self._handle_key_event(event)

        except asyncio.CancelledError:
            log.debug("Evdev keyboard cancelled (task stopped)")
            raise
        finally:
            if self.device:
                self.device.close()

    async def _handle_key_event(self, event) -> None:
        try:
            key_name = ecodes.bytype[event.type][event.code]
        except KeyError:
            log.debug(f"Unknown key code: {event.code}")
            return

        pressed = event.value == 1
        # value 2 = autorepeat: neither press nor release
        if event.value in (0, 1):
            self._update_modifier_state(key_name, pressed=pressed)

        if not pressed:
            return

        normalized = normalize_key_name(key_name)
        if not normalized:
            return

        modifiers = [k for k, v in self._modifiers.items() if v]
        await self.event_bus.publish(
            KeyboardKeyPressEvent(normalized, modifiers, keyboard=KeyboardSource.EVDEV)
        )

    def _update_modifier_state(self, key_name, pressed: bool) -> None:
        k = normalize_key_name(key_name) or str(key_name).replace("KEY_", "")
        if "CTRL" in k:
            self._modifiers["CTRL"] = pressed
        elif "SHIFT" in k:
            self._modifiers["SHIFT"] = pressed
        elif "ALT" in k:
            self._modifiers["ALT"] = pressed
