import setuptools
import os

own_dir = os.path.abspath(os.path.dirname(__file__))


def requirements():
    with open(os.path.join(own_dir, 'requirements.txt')) as f:
        for line in f.readlines():
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            yield line


def packages():
    return setuptools.find_packages(exclude=('test', 'test.*'))


def version():
    with open(os.path.join(own_dir, 'VERSION')) as f:
        return f.read().strip()


setuptools.setup(
    name='release-note-tools',
    version=version(),
    description='Tools for creating and merging release notes of Scalar products',
    python_requires='>=3.11',
    packages=packages(),
    install_requires=list(requirements()),
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'create-release-note = release_notes.cli:create_release_note_cli',
            'merge-release-notes = release_notes.cli:merge_release_notes_cli',
        ],
    },
)
