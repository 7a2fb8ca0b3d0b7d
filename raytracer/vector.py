import numpy as np

# ==================================================
# Vector Utilities
# ==================================================
def vec3(x, y, z):
    return np.array([x, y, z], dtype=float)

def normalize(v):
    n = np.linalg.norm(v)
    return v if n == 0 else v / n

def dot(a, b):
    return float(np.dot(a, b))

def cross(a, b):
    return np.cross(a, b)

def length_sq(v):
    return float(np.dot(v, v))

def reflect(I, N):
    return I - 2 * dot(I, N) * N

UNIT_X = vec3(1.0, 0.0, 0.0)
UNIT_Y = vec3(0.0, 1.0, 0.0)
UNIT_Z = vec3(0.0, 0.0, 1.0)
