import os
import os.path
import setuptools # type: ignore

root_path = os.path.dirname(__file__)

with open(os.path.join(root_path, "README.md"), "r") as fh:
    long_description = fh.read()

# single source for the version, roombeyond.core.roombeyond_version reports it
version:dict = {}
with open(os.path.join(root_path, "src", "roombeyond", "_version.py"), "r") as fh:
    exec(fh.read(), version)

setuptools.setup(
    name="roombeyond",
    version=version["version"],
    author="The Room Beyond developers",
    description="The Room Beyond: narrative core for a single room exploration game. Focus selection, dialog graphs and story progression.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(where="src"),
    package_dir={'': 'src'},

    package_data={
        'roombeyond': ['py.typed'],
        'roombeyond.core': ['py.typed'],
        'roombeyond.data': ['*.toml'],
    },
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        "numpy",
        "toml",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    python_requires='>=3.11',
    entry_points={
        'console_scripts': [
            'roombeyond = roombeyond.sim:main',
            'roombeyond-validate = roombeyond.validate:main',
        ],
    },
)
