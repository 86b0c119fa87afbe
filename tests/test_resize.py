import time
import threading
import unittest
from unittest.mock import Mock, call

import context

from streamer.resize import ResizeSynchronizer, TtySizeUnavailableError
from streamer.session import TransportError
from streamer.terminal import Dimensions

from mock_terminal import MockTerminal

class ResizeTtyTestCase(unittest.TestCase):
    def test(self):
        # Arrange
        terminal = MockTerminal(dimensions=Dimensions(40, 120))
        resize = Mock()

        synchronizer = ResizeSynchronizer(terminal, 'abc123', resize)

        # Act
        synchronizer.resize_tty()

        # Assert
        resize.assert_called_once_with('abc123', 40, 120)

    def test_zero_size(self):
        # Arrange
        terminal = MockTerminal(dimensions=Dimensions(0, 0))
        resize = Mock()

        synchronizer = ResizeSynchronizer(terminal, 'abc123', resize)

        # Act and assert
        with self.assertRaises(TtySizeUnavailableError):
            synchronizer.resize_tty()

        resize.assert_not_called()

    def test_zero_rows_only(self):
        # Arrange
        terminal = MockTerminal(dimensions=Dimensions(0, 80))
        resize = Mock()

        synchronizer = ResizeSynchronizer(terminal, 'abc123', resize)

        # Act
        synchronizer.resize_tty()

        # Assert
        resize.assert_called_once_with('abc123', 0, 80)

class InitTtySizeTestCase(unittest.TestCase):
    def test_success(self):
        # Arrange
        resize = Mock()

        synchronizer = ResizeSynchronizer(MockTerminal(), 'abc123', resize)

        # Act
        thread = synchronizer.init_tty_size()

        # Assert
        self.assertIsNone(thread)

        resize.assert_called_once_with('abc123', 24, 80)

    def test_retry_succeeds(self):
        # Arrange
        resize = Mock(side_effect=[TransportError('not running')] * 4 + [None])

        synchronizer = ResizeSynchronizer(MockTerminal(), 'abc123', resize)

        # Act
        start_time = time.perf_counter()

        with self.assertLogs('streamer.resize', level='WARNING'):
            thread = synchronizer.init_tty_size()

        thread.join(1)

        duration = time.perf_counter() - start_time

        # Assert
        self.assertFalse(thread.is_alive())

        self.assertEqual(resize.call_count, 5)

        self.assertGreaterEqual(duration, 0.04)

    def test_retry_gives_up(self):
        # Arrange
        resize = Mock(side_effect=TransportError('not running'))

        synchronizer = ResizeSynchronizer(MockTerminal(), 'abc123', resize)

        # Act
        with self.assertLogs('streamer.resize', level='WARNING') as logs:
            thread = synchronizer.init_tty_size()

            thread.join(1)

        # Assert
        self.assertFalse(thread.is_alive())

        self.assertEqual(resize.call_count, 6)

        self.assertIn('using default size', logs.output[-1])

    def test_zero_size_never_calls_resize(self):
        # Arrange
        resize = Mock()

        synchronizer = ResizeSynchronizer(MockTerminal(dimensions=Dimensions(0, 0)), 'abc123', resize)

        # Act
        with self.assertLogs('streamer.resize', level='WARNING'):
            thread = synchronizer.init_tty_size()

            thread.join(1)

        # Assert
        resize.assert_not_called()

    def test_retry_picks_up_new_size(self):
        # Arrange
        terminal = MockTerminal(dimensions=Dimensions(0, 0))
        resize = Mock()

        synchronizer = ResizeSynchronizer(terminal, 'abc123', resize, retry_delay=0.05)

        # Act
        with self.assertLogs('streamer.resize', level='WARNING'):
            thread = synchronizer.init_tty_size()

        terminal.dimensions = Dimensions(30, 100)

        thread.join(1)

        # Assert
        resize.assert_called_once_with('abc123', 30, 100)

class MonitorTestCase(unittest.TestCase):
    def setUp(self):
        self.terminal = MockTerminal()

        self.resized = threading.Semaphore(0)

        self.resize = Mock(side_effect=lambda *args: self.resized.release())

        self.synchronizer = ResizeSynchronizer(self.terminal, 'abc123', self.resize)

        self.addCleanup(self.synchronizer.stop)

    def test_size_change(self):
        # Arrange
        self.synchronizer.start()

        self.assertTrue(self.resized.acquire(timeout=1))

        self.terminal.dimensions = Dimensions(50, 132)

        # Act
        self.terminal.resize_handler()

        # Assert
        self.assertTrue(self.resized.acquire(timeout=1))

        self.assertEqual(self.resize.call_args_list, [call('abc123', 24, 80), call('abc123', 50, 132)])

    def test_size_change_failure_is_ignored(self):
        # Arrange
        self.synchronizer.start()

        self.assertTrue(self.resized.acquire(timeout=1))

        def resize(*args):
            if self.resize.call_count == 2:
                raise TransportError('not running')

            self.resized.release()

        self.resize.side_effect = resize

        # Act
        self.terminal.resize_handler()
        self.terminal.resize_handler()

        # Assert
        self.assertTrue(self.resized.acquire(timeout=1))

        self.assertEqual(self.resize.call_count, 3)

    def test_stop(self):
        # Arrange
        self.synchronizer.start()

        listener = self.synchronizer.listener

        # Act
        self.synchronizer.stop()

        # Assert
        self.terminal.unsubscribe.assert_called_once()

        listener.join(1)

        self.assertFalse(listener.is_alive())
