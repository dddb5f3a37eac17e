""" Room Beyond core data model """

from .base import Observer, Observable, InteractableObject, roombeyond_version
from .registry import ObjectRegistry, load_objects
