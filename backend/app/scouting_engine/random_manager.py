import random
import zlib


class RandomManager:
    def __init__(self, seed=None):
        self.seed = seed
        self.random = random.Random(seed)

    def rand(self):
        return self.random.random()

    def randint(self, a, b):
        return self.random.randint(a, b)

    def choice(self, seq):
        return self.random.choice(seq)

    def uniform(self, a, b):
        return self.random.uniform(a, b)

    def gauss(self, mu, sigma):
        return self.random.gauss(mu, sigma)

    def child(self, label):
        # crc32 instead of hash() so child streams survive interpreter restarts
        if self.seed is None:
            return RandomManager(self.random.getrandbits(32))
        return RandomManager((int(self.seed) * 1_000_003) ^ zlib.crc32(str(label).encode("utf-8")))
