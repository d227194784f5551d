import unittest
from avl.circular_queue import CircularQueue, INITIAL_CAPACITY


class TestCircularQueue(unittest.TestCase):
    def test_new_queue_is_empty(self):
        q: CircularQueue[int] = CircularQueue()
        self.assertEqual(len(q), 0)
        self.assertTrue(q.is_empty())
        self.assertFalse(q)
        self.assertEqual(q.capacity, INITIAL_CAPACITY)

    def test_dequeue_on_empty_raises(self):
        q: CircularQueue[int] = CircularQueue()
        with self.assertRaises(IndexError):
            q.dequeue()

    def test_non_positive_capacity_rejected(self):
        with self.assertRaises(ValueError):
            CircularQueue(0)

    def test_fifo_order(self):
        q: CircularQueue[int] = CircularQueue()
        for value in (1, 2, 3):
            q.enqueue(value)
        self.assertEqual([q.dequeue(), q.dequeue(), q.dequeue()], [1, 2, 3])
        self.assertTrue(q.is_empty())

    def test_grows_by_doubling(self):
        q: CircularQueue[int] = CircularQueue(2)
        for value in range(5):
            q.enqueue(value)
        self.assertEqual(q.capacity, 8)
        self.assertEqual(len(q), 5)

    def test_growth_after_wraparound_keeps_order(self):
        q: CircularQueue[int] = CircularQueue(4)
        for value in range(3):
            q.enqueue(value)
        q.dequeue()
        q.dequeue()
        for value in range(3, 8):
            q.enqueue(value)
        self.assertEqual(q.capacity, 8)
        drained = []
        while q:
            drained.append(q.dequeue())
        self.assertEqual(drained, [2, 3, 4, 5, 6, 7])

    def test_interleaved_enqueue_dequeue(self):
        q: CircularQueue[int] = CircularQueue(2)
        out = []
        for value in range(20):
            q.enqueue(value)
            if value % 3 == 2:
                out.append(q.dequeue())
        while q:
            out.append(q.dequeue())
        self.assertEqual(out, list(range(20)))


if __name__ == '__main__':
    unittest.main()
