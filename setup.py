from setuptools import setup

setup(
    name="sshman",
    version="0.1.0",
    description="Command-line address book for SSH connections",
    packages=["sshman", "sshman.tools"],
    install_requires=["tqdm"],
    extras_require={"test": ["pytest"]},
    python_requires=">=3.7.0",
    entry_points={"console_scripts": [
        "sshman=sshman.main_local:main",
    ]},
)
