from setuptools import setup, find_packages
import re
from pathlib import Path

_version_re = re.compile(
    r"^__version__\s*(?::\s*[\w\[\]]+)?\s*=\s*['\"]([^'\"]+)['\"]", re.M
)


def file_getVersion(rel_path: str) -> str:
    """
    Retrieve the version string from the specified file.
    """
    version_file = Path(__file__).parent / rel_path
    if not version_file.exists():
        raise RuntimeError(f"Version file {rel_path} not found.")

    with open(version_file, 'r') as f:
        content = f.read()
        match = _version_re.search(content)
        if not match:
            raise RuntimeError(f"Could not find __version__ in {rel_path}")
        return match.group(1)


setup(
    name='p69',
    version=file_getVersion('p69/p69.py'),
    description='Token expansion for style sheets',
    author='FNNDSC',
    author_email='rudolph.pienaar@childrens.harvard.edu',
    packages=find_packages(include=['p69', 'p69.*']),
    python_requires='>=3.11',
    install_requires=[
        'chris_plugin',
        'loguru',
        'pydantic>=2',
        'pydantic-settings',
        'rich',
        'appdirs',
    ],
    license='MIT',
    entry_points={
        'console_scripts': [
            'p69 = p69.p69:main'
        ]
    },
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Software Development :: Build Tools',
        'Topic :: Text Processing',
    ],
    extras_require={
        'none': [],
        'dev': [
            'pytest~=8.0',
            'pytest-asyncio',
        ]
    }
)
