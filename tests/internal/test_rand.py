import threading

from datadog_tracking_http_client.internal import rand


def test_rand63bits_top_bit_clear():
    for _ in range(10000):
        value = rand.rand63bits()
        assert 0 <= value < 2 ** 63


def test_rand63bits_distinct():
    values = set(rand.rand63bits() for _ in range(1000))
    assert len(values) == 1000


def test_random_percent_range():
    for _ in range(10000):
        assert 0.0 <= rand.random_percent() < 100.0


def test_generator_is_thread_local():
    generators = []

    def target():
        generators.append(rand._generator())

    threads = [threading.Thread(target=target) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert generators[0] is not generators[1]
    assert rand._generator() is rand._generator()


def test_reset_generators():
    before = rand._generator()
    rand._reset_generators()
    assert rand._generator() is not before
