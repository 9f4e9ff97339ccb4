from rest_framework import serializers
from .models import Mess, MessMember


class MessMemberSerializer(serializers.ModelSerializer):
    """Roster entry of a mess."""
    
    has_account = serializers.SerializerMethodField()
    
    class Meta:
        model = MessMember
        fields = ['id', 'name', 'email', 'role', 'join_date', 'has_account']
        read_only_fields = fields
    
    def get_has_account(self, obj):
        return obj.user_id is not None


class MessSerializer(serializers.ModelSerializer):
    """Main serializer for messes."""
    
    member_count = serializers.SerializerMethodField()
    user_role = serializers.SerializerMethodField()
    
    class Meta:
        model = Mess
        fields = [
            'id',
            'name',
            'member_count',
            'user_role',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields
    
    def get_member_count(self, obj):
        return obj.members.count()
    
    def get_user_role(self, obj):
        """Get current user's role in the mess."""
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return obj.get_user_role(request.user)
        return None


class MessCreateSerializer(serializers.Serializer):
    """Serializer for creating a mess."""
    
    name = serializers.CharField(max_length=100)
    password = serializers.CharField(
        min_length=4,
        max_length=128,
        write_only=True,
        style={'input_type': 'password'}
    )

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Mess name cannot be blank')
        return value


class JoinMessSerializer(serializers.Serializer):
    """Serializer for joining a mess by name and password."""
    
    name = serializers.CharField(max_length=100)
    password = serializers.CharField(
        max_length=128,
        write_only=True,
        style={'input_type': 'password'}
    )


class AddMemberSerializer(serializers.Serializer):
    """Serializer for adding a roster entry."""
    
    name = serializers.CharField(max_length=200)
    email = serializers.EmailField(max_length=255)


class RemoveMemberSerializer(serializers.Serializer):
    """Serializer for removing a roster entry."""
    
    member_id = serializers.UUIDField()




class UpdateMemberSerializer(serializers.Serializer):
    """Serializer for editing a roster entry."""
    
    member_id = serializers.UUIDField()
    name = serializers.CharField(max_length=200, required=False)
    email = serializers.EmailField(max_length=255, required=False)
